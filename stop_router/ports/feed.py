"""Feed ports - Abstractions over parsed transit feed data.

The services only need already-parsed stops, stop times and resolved
edges, so anything that satisfies this protocol (the CSV repository or
an in-memory fixture) can back them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..config import RoutingConfig
    from ..domain.models import Edge, Stop, StopTime


class FeedRepositoryPort(Protocol):
    """Port for loading parsed transit feed records.

    Implementation: adapters/feed/csv_repository.py
    """

    def load_stops(self) -> Sequence[Stop]:
        """Return every stop, names already normalized."""
        ...

    def load_stop_times(self) -> Sequence[StopTime]:
        """Return stop-time rows in feed order."""
        ...

    def load_edges(self, routing: RoutingConfig) -> Sequence[Edge]:
        """Return the weighted edges derived from trips and transfers."""
        ...

    def vertex_count(self) -> int:
        """Return one more than the largest stop identifier."""
        ...
