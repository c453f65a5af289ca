"""CSV feed repository adapter.

Reads the GTFS-style ``stops.txt``, ``stop_times.txt`` and
``transfers.txt`` files and turns them into the parsed records the
services consume:
- Configuration injection (paths from config)
- Caching of parsed rows
- Edge derivation from trips and transfers
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ...config import FeedConfig, RoutingConfig, get_config
from ...domain.errors import FeedError
from ...domain.models import Edge, Stop, StopTime
from ...normalize import normalize_stop_name

# (from_stop_id, to_stop_id, transfer_type, min_transfer_time)
TransferRow = Tuple[int, int, str, str]

FIXED_TRANSFER = "0"
TIMED_TRANSFER = "2"


@dataclass
class CSVFeedRepository:
    """Feed repository that loads from CSV files.

    This adapter implements FeedRepositoryPort. Parsed rows are cached
    after the first read; call ``clear_cache`` to re-read the files.

    Attributes:
        config: Feed configuration (data directory, file names)
    """

    config: FeedConfig = field(default_factory=lambda: get_config().feed)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _stops: Optional[List[Stop]] = field(default=None, repr=False)
    _stop_times: Optional[List[StopTime]] = field(default=None, repr=False)
    _transfers: Optional[List[TransferRow]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load_stops(self) -> List[Stop]:
        """Load every stop with a normalized name.

        Raises:
            FeedError: If the stops file cannot be read.
        """
        if self._stops is not None:
            return self._stops

        stops: List[Stop] = []
        for row in self._read_rows(self.config.stops_path):
            raw_name = (row.get("stop_name") or "").strip()
            stop_id = _parse_id(row.get("stop_id"))
            if stop_id is None or not raw_name:
                self._logger.debug("Skipping stop row", extra={"row": row})
                continue
            stops.append(
                Stop(
                    stop_id=stop_id,
                    name=normalize_stop_name(raw_name),
                    raw_name=raw_name,
                )
            )

        self._stops = stops
        self._logger.info("Stops loaded", extra={"stops": len(stops)})
        return stops

    def load_stop_times(self) -> List[StopTime]:
        """Load stop-time rows in file order.

        Raises:
            FeedError: If the stop-times file cannot be read.
        """
        if self._stop_times is not None:
            return self._stop_times

        stop_times: List[StopTime] = []
        for row in self._read_rows(self.config.stop_times_path):
            trip_id = (row.get("trip_id") or "").strip()
            stop_id = _parse_id(row.get("stop_id"))
            if not trip_id or stop_id is None:
                self._logger.debug("Skipping stop time row", extra={"row": row})
                continue
            stop_times.append(
                StopTime(
                    trip_id=trip_id,
                    arrival_time=(row.get("arrival_time") or "").strip(),
                    stop_id=stop_id,
                )
            )

        self._stop_times = stop_times
        self._logger.info("Stop times loaded", extra={"stop_times": len(stop_times)})
        return stop_times

    def load_transfers(self) -> List[TransferRow]:
        """Load transfer rows as ``(from, to, type, min_transfer_time)``.

        Raises:
            FeedError: If the transfers file cannot be read.
        """
        if self._transfers is not None:
            return self._transfers

        transfers: List[TransferRow] = []
        for row in self._read_rows(self.config.transfers_path):
            from_id = _parse_id(row.get("from_stop_id"))
            to_id = _parse_id(row.get("to_stop_id"))
            if from_id is None or to_id is None:
                self._logger.debug("Skipping transfer row", extra={"row": row})
                continue
            transfers.append(
                (
                    from_id,
                    to_id,
                    (row.get("transfer_type") or "").strip(),
                    (row.get("min_transfer_time") or "").strip(),
                )
            )

        self._transfers = transfers
        return transfers

    def load_edges(self, routing: Optional[RoutingConfig] = None) -> List[Edge]:
        """Derive weighted edges from consecutive trip stops and transfers.

        Consecutive stop-time rows of the same trip give an edge costing
        ``hop_cost``. Transfers of type 0 cost ``fixed_transfer_cost``;
        type 2 costs ``min_transfer_time / timed_transfer_divisor``. Other
        transfer types are not walkable and are skipped.
        """
        routing = routing or get_config().routing
        edges: List[Edge] = []

        previous: Optional[StopTime] = None
        for stop_time in self.load_stop_times():
            if previous is not None and previous.trip_id == stop_time.trip_id:
                edges.append(Edge(previous.stop_id, stop_time.stop_id, routing.hop_cost))
            previous = stop_time
        trip_edges = len(edges)

        for from_id, to_id, transfer_type, min_time in self.load_transfers():
            if transfer_type == FIXED_TRANSFER:
                edges.append(Edge(from_id, to_id, routing.fixed_transfer_cost))
            elif transfer_type == TIMED_TRANSFER:
                try:
                    minutes = float(min_time)
                except ValueError:
                    minutes = math.nan
                if not (math.isfinite(minutes) and minutes >= 0):
                    self._logger.debug(
                        "Skipping timed transfer without valid duration",
                        extra={"from_stop": from_id, "to_stop": to_id, "min_time": min_time},
                    )
                    continue
                edges.append(
                    Edge(from_id, to_id, minutes / routing.timed_transfer_divisor)
                )

        self._logger.info(
            "Edges derived",
            extra={"trip_edges": trip_edges, "transfer_edges": len(edges) - trip_edges},
        )
        return edges

    def vertex_count(self) -> int:
        """One more than the largest stop identifier in the feed."""
        stops = self.load_stops()
        if not stops:
            return 0
        return max(stop.stop_id for stop in stops) + 1

    def stops_by_id(self) -> Dict[int, Stop]:
        return {stop.stop_id: stop for stop in self.load_stops()}

    def clear_cache(self) -> None:
        """Clear cached feed data."""
        self._stops = None
        self._stop_times = None
        self._transfers = None
        self._logger.debug("Feed cache cleared")

    def _read_rows(self, path: Path) -> Iterator[Dict[str, str]]:
        self._logger.debug("Reading feed file", extra={"path": str(path)})
        try:
            with path.open(newline="", encoding="utf-8-sig") as f:
                yield from csv.DictReader(f)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise FeedError(
                f"Failed to read feed file {path.name}",
                cause=e,
                file_path=str(path),
            ) from e


def _parse_id(value: Optional[str]) -> Optional[int]:
    try:
        parsed = int((value or "").strip())
    except ValueError:
        return None
    return parsed if parsed >= 0 else None
