"""Trip search service - trips by arrival time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple, Union

from ..domain.models import TripMatch
from ..ports.feed import FeedRepositoryPort
from ..times import is_valid_time, parse_time


@dataclass
class TripSearchService:
    """Finds every trip that has a stop time equal to a given time.

    Rows whose arrival time is not a valid ``HH:MM:SS`` time of day are
    ignored entirely, both for matching and for the listed stops.
    """

    repository: FeedRepositoryPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def trips_arriving_at(self, arrival_time: str) -> List[TripMatch]:
        """Return matching trips sorted by trip id.

        Raises:
            InvalidTimeError: If ``arrival_time`` is not a valid time.
        """
        wanted = parse_time(arrival_time)

        stops_by_trip: Dict[str, List[int]] = {}
        matching = set()
        for stop_time in self.repository.load_stop_times():
            if not is_valid_time(stop_time.arrival_time):
                continue
            stops_by_trip.setdefault(stop_time.trip_id, []).append(stop_time.stop_id)
            if parse_time(stop_time.arrival_time) == wanted:
                matching.add(stop_time.trip_id)

        trips = [
            TripMatch(trip_id=trip_id, stop_ids=tuple(stops_by_trip[trip_id]))
            for trip_id in sorted(matching, key=_trip_sort_key)
        ]
        self._logger.info(
            "Trips searched",
            extra={"arrival_time": arrival_time, "trips": len(trips)},
        )
        return trips

    @staticmethod
    def format_trip(trip: TripMatch) -> str:
        stops = " -> ".join(str(stop_id) for stop_id in trip.stop_ids)
        return f"Trip Id: {trip.trip_id} with stops : {stops}"


def _trip_sort_key(trip_id: str) -> Tuple[int, Union[int, str]]:
    """Numeric trip ids sort numerically and before any other id."""
    if trip_id.isdigit():
        return 0, int(trip_id)
    return 1, trip_id
