"""Route planner service - shortest paths between named stops.

This service resolves stop names to vertex ids, builds the weighted
graph from the repository's edges once, and runs the configured
shortest-path policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import RoutingConfig, get_config
from ..domain.errors import NoRouteFoundError, StopNotFoundError
from ..domain.models import RouteResult
from ..graph import WeightedGraph
from ..ports.feed import FeedRepositoryPort
from .stop_search import StopSearchService


@dataclass
class RoutePlannerService:
    """Main service for routing between two stops.

    Attributes:
        repository: Source of stops and edges
        routing: Edge costs and relaxation policy
        stop_search: Name resolution (built from ``repository`` if omitted)
    """

    repository: FeedRepositoryPort
    routing: RoutingConfig = field(default_factory=lambda: get_config().routing)
    stop_search: Optional[StopSearchService] = None

    _logger: logging.Logger = field(init=False, repr=False)
    _graph: Optional[WeightedGraph] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.stop_search is None:
            self.stop_search = StopSearchService(self.repository)

    @property
    def graph(self) -> WeightedGraph:
        if self._graph is None:
            edges = self.repository.load_edges(self.routing)
            vertex_count = self.repository.vertex_count()
            # Transfers may name stops missing from the stops file.
            for edge in edges:
                vertex_count = max(vertex_count, edge.from_id + 1, edge.to_id + 1)
            graph = WeightedGraph(vertex_count)
            for edge in edges:
                graph.add_edge(edge.from_id, edge.to_id, edge.weight)
            self._graph = graph
            self._logger.info(
                "Graph built",
                extra={"vertices": graph.vertex_count, "edges": graph.edge_count},
            )
        return self._graph

    def plan(self, start: str, end: str) -> RouteResult:
        """Find the cheapest route between two stop names.

        Args:
            start: Departure stop name.
            end: Arrival stop name.

        Returns:
            RouteResult with the traversed legs and the total cost.

        Raises:
            StopNotFoundError: If either stop name is unknown.
            NoRouteFoundError: If no path exists between the stops.
        """
        assert self.stop_search is not None
        missing = []
        departure = arrival = None
        try:
            departure = self.stop_search.resolve(start)
        except StopNotFoundError:
            missing.append("start")
        try:
            arrival = self.stop_search.resolve(end)
        except StopNotFoundError:
            missing.append("end")

        if departure is None or arrival is None:
            what = " and ".join(missing)
            raise StopNotFoundError(
                f"{what.capitalize()} stop not found",
                stop_name=start if departure is None else end,
            )

        self._logger.info(
            "Planning route",
            extra={"departure": departure.stop_id, "arrival": arrival.stop_id},
        )
        return self.plan_by_id(departure.stop_id, arrival.stop_id)

    def plan_by_id(self, source: int, target: int) -> RouteResult:
        """Find the cheapest route between two vertex ids.

        Raises:
            VertexOutOfRangeError: If an id is not a vertex of the graph.
            NoRouteFoundError: If no path exists.
        """
        route = self.graph.shortest_path(source, target, self.routing.policy)
        if route is None:
            self._logger.warning(
                "No route found",
                extra={"departure": source, "arrival": target},
            )
            raise NoRouteFoundError(
                f"No path from {source} to {target}",
                departure=source,
                arrival=target,
            )

        self._logger.info(
            "Route found",
            extra={"legs": route.num_legs, "total_cost": route.total_cost},
        )
        return route

    def format_route(self, route: RouteResult) -> List[str]:
        """Format a route as human-readable lines.

        One line per leg followed by the total cost, e.g.::

            from index 646 to index 378 with cost of 1.0
            total cost: 1.0
        """
        lines = [
            f"from index {leg.from_id} to index {leg.to_id} with cost of {leg.cost}"
            for leg in route.legs
        ]
        lines.append(f"total cost: {route.total_cost}")
        return lines
