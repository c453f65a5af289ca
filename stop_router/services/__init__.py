"""Services layer - Application services built on the core structures.

Services orchestrate the feed repository, the prefix trie and the
weighted graph. They are the main entry points for the CLI.
"""

from .route_planner import RoutePlannerService
from .stop_search import StopSearchService
from .trip_search import TripSearchService

__all__ = ["StopSearchService", "RoutePlannerService", "TripSearchService"]
