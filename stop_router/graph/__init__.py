"""Graph-related utilities for representing the transit network.

This subpackage contains the weighted digraph built from stop-time and
transfer records and the Dijkstra shortest-path search run on top of it.
"""

from .weighted_graph import RelaxationPolicy, WeightedGraph

__all__ = ["WeightedGraph", "RelaxationPolicy"]
