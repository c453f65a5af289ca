"""Character-indexed prefix trie used for stop-name lookup.

This subpackage contains the ternary search trie that answers exact,
longest-prefix, prefix and wildcard queries over stop names.
"""

from .ternary_search_trie import WILDCARD, PrefixTrie, TernarySearchTrie

__all__ = ["TernarySearchTrie", "PrefixTrie", "WILDCARD"]
