"""Domain layer - Core models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    FeedError,
    InvalidKeyError,
    InvalidTimeError,
    InvalidWeightError,
    NoRouteFoundError,
    StopNotFoundError,
    StopRouterError,
    VertexOutOfRangeError,
)
from .models import Edge, RouteLeg, RouteResult, Stop, StopTime, TripMatch

__all__ = [
    # Models
    "Stop",
    "Edge",
    "StopTime",
    "RouteLeg",
    "RouteResult",
    "TripMatch",
    # Errors
    "StopRouterError",
    "InvalidKeyError",
    "InvalidWeightError",
    "VertexOutOfRangeError",
    "InvalidTimeError",
    "StopNotFoundError",
    "NoRouteFoundError",
    "FeedError",
]
