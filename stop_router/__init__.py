"""Top-level package for the stop router.

The two core structures are a ternary search trie over stop names
(exact, prefix, longest-prefix and wildcard lookup) and a weighted
digraph over stop ids with a Dijkstra shortest-path search. The feed
repository, services and CLI build both from a GTFS-style transit feed.

Example:
    from stop_router import TernarySearchTrie, WeightedGraph

    graph = WeightedGraph(3)
    graph.add_edge(0, 1, 1.0)
    graph.add_edge(1, 2, 1.0)
    graph.add_edge(0, 2, 5.0)
    graph.shortest_path(0, 2).total_cost   # 2.0
"""

from .graph import RelaxationPolicy, WeightedGraph
from .trie import PrefixTrie, TernarySearchTrie

__version__ = "0.1.0"

__all__ = [
    "TernarySearchTrie",
    "PrefixTrie",
    "WeightedGraph",
    "RelaxationPolicy",
]
