"""Directed weighted graph and shortest-path computation.

Vertices are dense integers in ``[0, vertex_count)``. Each vertex owns a
list of ``(to, weight)`` adjacency entries; parallel edges are kept.
Shortest paths use a binary-heap form of Dijkstra's algorithm.
"""

from __future__ import annotations

import heapq
import logging
import math
from enum import Enum
from typing import List, Optional, Tuple

from ..domain.errors import InvalidWeightError, VertexOutOfRangeError
from ..domain.models import RouteLeg, RouteResult

logger = logging.getLogger(__name__)

INF = math.inf

# Heap entries compare as (distance, vertex): ties go to the lower vertex id.
HeapEntry = Tuple[float, int]


class RelaxationPolicy(Enum):
    """How the priority queue decides a vertex is settled.

    ``FINALIZE_ON_POP`` is textbook Dijkstra: a vertex may be pushed many
    times and its distance is final once popped. ``FIRST_ENQUEUE`` claims
    a vertex the first time it is pushed and never relaxes it again; it
    reproduces older output but can miss cheaper routes found later.
    """

    FINALIZE_ON_POP = "finalize_on_pop"
    FIRST_ENQUEUE = "first_enqueue"


class WeightedGraph:
    """Adjacency-list digraph over integer vertex identifiers."""

    def __init__(self, vertex_count: int) -> None:
        if vertex_count < 0:
            raise ValueError(f"vertex_count must be >= 0, got {vertex_count}")
        self._vertex_count = vertex_count
        self._edge_count = 0
        self._adjacency: List[List[Tuple[int, float]]] = [
            [] for _ in range(vertex_count)
        ]

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def add_edge(self, from_id: int, to_id: int, weight: float) -> None:
        """Append the directed edge ``from_id -> to_id``.

        Raises:
            VertexOutOfRangeError: If either endpoint is not a vertex.
            InvalidWeightError: If ``weight`` is negative or NaN.
        """
        self._check_vertex(from_id)
        self._check_vertex(to_id)
        if math.isnan(weight) or weight < 0:
            raise InvalidWeightError(
                f"Edge {from_id} -> {to_id} has invalid weight {weight}",
                weight=weight,
            )
        self._adjacency[from_id].append((to_id, float(weight)))
        self._edge_count += 1

    def neighbors(self, vertex: int) -> List[Tuple[int, float]]:
        """Outgoing ``(to, weight)`` entries of ``vertex`` in insertion order."""
        self._check_vertex(vertex)
        return list(self._adjacency[vertex])

    def out_degree(self, vertex: int) -> int:
        self._check_vertex(vertex)
        return len(self._adjacency[vertex])

    def get_weight(self, from_id: int, to_id: int) -> float:
        """Weight of the first stored edge ``from_id -> to_id``.

        This is not necessarily the cheapest parallel edge. Returns
        ``math.inf`` when no such edge exists.
        """
        self._check_vertex(from_id)
        for target, weight in self._adjacency[from_id]:
            if target == to_id:
                return weight
        return INF

    def shortest_path(
        self,
        source: int,
        target: int,
        policy: Optional[RelaxationPolicy] = None,
    ) -> Optional[RouteResult]:
        """Compute the lowest-cost path from ``source`` to ``target``.

        Parameters
        ----------
        source:
            Departure vertex.
        target:
            Arrival vertex.
        policy:
            Relaxation policy, ``FINALIZE_ON_POP`` when omitted.

        Returns
        -------
        RouteResult or None
            The reconstructed route, or ``None`` if ``target`` cannot be
            reached. ``source == target`` gives a zero-leg, zero-cost route.

        Raises
        ------
        VertexOutOfRangeError
            If ``source`` or ``target`` is not a vertex.
        """
        self._check_vertex(source)
        self._check_vertex(target)
        policy = policy or RelaxationPolicy.FINALIZE_ON_POP

        if policy is RelaxationPolicy.FIRST_ENQUEUE:
            distance, predecessor, reached = self._first_enqueue(source)
        else:
            distance, predecessor, reached = self._finalize_on_pop(source)

        logger.debug(
            "Shortest path search finished",
            extra={
                "source": source,
                "target": target,
                "policy": policy.value,
                "reached": sum(reached),
            },
        )

        if not reached[target]:
            return None
        return self._reconstruct(source, target, distance, predecessor)

    def _finalize_on_pop(
        self, source: int
    ) -> Tuple[List[float], List[int], List[bool]]:
        distance = [INF] * self._vertex_count
        predecessor = [-1] * self._vertex_count
        reached = [False] * self._vertex_count
        finalized = [False] * self._vertex_count

        distance[source] = 0.0
        predecessor[source] = source
        reached[source] = True

        heap: List[HeapEntry] = [(0.0, source)]
        while heap:
            current, u = heapq.heappop(heap)
            if finalized[u] or current > distance[u]:
                continue
            finalized[u] = True
            for v, weight in self._adjacency[u]:
                if finalized[v] or weight == INF:
                    continue
                candidate = current + weight
                if candidate < distance[v]:
                    distance[v] = candidate
                    predecessor[v] = u
                    reached[v] = True
                    heapq.heappush(heap, (candidate, v))
        return distance, predecessor, reached

    def _first_enqueue(
        self, source: int
    ) -> Tuple[List[float], List[int], List[bool]]:
        distance = [INF] * self._vertex_count
        predecessor = [-1] * self._vertex_count
        reached = [False] * self._vertex_count
        enqueued = [False] * self._vertex_count

        distance[source] = 0.0
        predecessor[source] = source
        reached[source] = True
        enqueued[source] = True

        heap: List[HeapEntry] = [(0.0, source)]
        while heap:
            _, u = heapq.heappop(heap)
            for v, weight in self._adjacency[u]:
                if enqueued[v] or weight == INF:
                    continue
                if distance[u] + weight < distance[v]:
                    distance[v] = distance[u] + weight
                    predecessor[v] = u
                    reached[v] = True
                enqueued[v] = True
                heapq.heappush(heap, (distance[v], v))
        return distance, predecessor, reached

    def _reconstruct(
        self,
        source: int,
        target: int,
        distance: List[float],
        predecessor: List[int],
    ) -> RouteResult:
        path = [target]
        node = target
        while node != source:
            node = predecessor[node]
            path.append(node)
        path.reverse()

        legs = tuple(
            RouteLeg(from_id=a, to_id=b, cost=self.get_weight(a, b))
            for a, b in zip(path, path[1:])
        )
        return RouteResult(
            source=source,
            target=target,
            legs=legs,
            total_cost=distance[target],
        )

    def _check_vertex(self, vertex: int) -> None:
        if not 0 <= vertex < self._vertex_count:
            raise VertexOutOfRangeError(
                f"Vertex {vertex} outside [0, {self._vertex_count})",
                vertex=vertex,
                vertex_count=self._vertex_count,
            )

    def __repr__(self) -> str:
        return f"WeightedGraph(vertices={self._vertex_count}, edges={self._edge_count})"
