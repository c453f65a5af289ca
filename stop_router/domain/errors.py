"""Typed domain errors for the stop router.

All errors inherit from StopRouterError and can optionally wrap a root
cause exception for debugging. Argument and bounds errors also inherit
from the matching built-in exception so callers can catch ``ValueError``
or ``IndexError`` without knowing about this module.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StopRouterError(Exception):
    """Base error for the stop router domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidKeyError(StopRouterError, ValueError):
    """A trie key, prefix or query was missing or empty.

    Attributes:
        key: The offending key (``None`` when absent)
    """

    key: Optional[str] = None


@dataclass
class InvalidWeightError(StopRouterError, ValueError):
    """An edge weight was negative or not a number.

    Attributes:
        weight: The rejected weight
    """

    weight: float = 0.0


@dataclass
class VertexOutOfRangeError(StopRouterError, IndexError):
    """A vertex identifier lies outside ``[0, vertex_count)``.

    Attributes:
        vertex: The offending vertex identifier
        vertex_count: Number of vertices in the graph
    """

    vertex: int = -1
    vertex_count: int = 0


@dataclass
class InvalidTimeError(StopRouterError, ValueError):
    """A time string is not a valid ``HH:MM:SS`` value.

    Attributes:
        value: The rejected input
    """

    value: str = ""


@dataclass
class StopNotFoundError(StopRouterError):
    """No stop carries the requested name.

    Attributes:
        stop_name: The (normalized) name that was looked up
    """

    stop_name: str = ""


@dataclass
class NoRouteFoundError(StopRouterError):
    """No path exists between the requested stops.

    Attributes:
        departure: Departure stop identifier
        arrival: Arrival stop identifier
    """

    departure: int = -1
    arrival: int = -1


@dataclass
class FeedError(StopRouterError):
    """A transit feed file could not be read.

    Attributes:
        file_path: Path to the feed file if relevant
    """

    file_path: Optional[str] = None
