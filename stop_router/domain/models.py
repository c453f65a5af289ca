"""Immutable domain models for the stop router.

All models are frozen dataclasses with slots. They have no external
dependencies and are shared by the core structures, the feed
repository and the services.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Stop:
    """A transit stop.

    Attributes:
        stop_id: Dense integer identifier, also the graph vertex id
        name: Normalized name used as the trie key
        raw_name: Name exactly as found in the feed
    """

    stop_id: int
    name: str
    raw_name: str = ""


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed, weighted connection between two stops."""

    from_id: int
    to_id: int
    weight: float


@dataclass(frozen=True, slots=True)
class StopTime:
    """One row of the stop-times table."""

    trip_id: str
    arrival_time: str
    stop_id: int


@dataclass(frozen=True, slots=True)
class RouteLeg:
    """A single traversed edge of a reconstructed route."""

    from_id: int
    to_id: int
    cost: float


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a shortest-path query.

    Attributes:
        source: Departure vertex
        target: Arrival vertex
        legs: Traversed edges in travel order
        total_cost: Distance of ``target`` from ``source``
    """

    source: int
    target: int
    legs: tuple[RouteLeg, ...] = field(default_factory=tuple)
    total_cost: float = 0.0

    @property
    def path(self) -> tuple[int, ...]:
        """Vertex identifiers from source to target, inclusive."""
        if not self.legs:
            return (self.source,)
        return (self.legs[0].from_id,) + tuple(leg.to_id for leg in self.legs)

    @property
    def is_empty(self) -> bool:
        """Check whether the route has no legs (source == target)."""
        return len(self.legs) == 0

    @property
    def num_legs(self) -> int:
        return len(self.legs)


@dataclass(frozen=True, slots=True)
class TripMatch:
    """A trip with a stop time equal to a queried arrival time.

    Attributes:
        trip_id: Trip identifier from the feed
        stop_ids: Every stop the trip visits, in feed order
    """

    trip_id: str
    stop_ids: tuple[int, ...] = field(default_factory=tuple)
