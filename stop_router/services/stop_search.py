"""Stop search service - name lookups over a prefix trie.

The trie is built once from the repository's stops on first use and is
read-only afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.errors import InvalidKeyError, StopNotFoundError
from ..domain.models import Stop
from ..normalize import normalize_stop_name
from ..ports.feed import FeedRepositoryPort
from ..trie import TernarySearchTrie


@dataclass
class StopSearchService:
    """Exact, prefix, wildcard and longest-prefix search on stop names.

    Queries go through the same normalization as feed names, so
    ``"wb hastings st"`` and ``"HASTINGS ST WB"`` both reach the feed name
    ``"WB HASTINGS ST"``.
    When several stops share a normalized name the last one in the feed
    wins.

    Attributes:
        repository: Source of parsed stops
    """

    repository: FeedRepositoryPort

    _logger: logging.Logger = field(init=False, repr=False)
    _trie: Optional[TernarySearchTrie[Stop]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def trie(self) -> TernarySearchTrie[Stop]:
        if self._trie is None:
            trie: TernarySearchTrie[Stop] = TernarySearchTrie()
            for stop in self.repository.load_stops():
                trie.put(stop.name, stop)
            self._trie = trie
            self._logger.info(
                "Stop trie built",
                extra={"keys": trie.size(), "nodes": trie.node_count},
            )
        return self._trie

    def search(self, prefix: str) -> List[Stop]:
        """Stops whose normalized name starts with ``prefix``, in name order.

        Trailing whitespace ends a word: ``"MAIN ST "`` finds
        ``"MAIN ST FS 12TH AVE"`` but not ``"MAIN STREET"``.

        Raises:
            InvalidKeyError: If ``prefix`` is empty after normalization.
        """
        key = self._normalize(prefix)
        if prefix[-1:].isspace():
            key += " "
        names = self.trie.keys_with_prefix(key)
        self._logger.debug("Prefix search", extra={"prefix": key, "matches": len(names)})
        return self._stops_for(names)

    def match(self, pattern: str) -> List[Stop]:
        """Stops whose name matches ``pattern`` (``.`` is a wildcard)."""
        names = self.trie.keys_that_match(self._normalize(pattern))
        return self._stops_for(names)

    def longest_prefix(self, query: str) -> Optional[Stop]:
        """The stop with the longest name that prefixes ``query``, if any."""
        name = self.trie.longest_prefix_of(self._normalize(query))
        if not name:
            return None
        return self.trie.get(name)

    def resolve(self, name: str) -> Stop:
        """Exact lookup of a stop by name.

        Raises:
            InvalidKeyError: If ``name`` is empty after normalization.
            StopNotFoundError: If no stop carries that name.
        """
        key = self._normalize(name)
        stop = self.trie.get(key)
        if stop is None:
            raise StopNotFoundError(f"Stop not found: {key}", stop_name=key)
        return stop

    def _stops_for(self, names: List[str]) -> List[Stop]:
        stops = []
        for name in names:
            stop = self.trie.get(name)
            if stop is not None:
                stops.append(stop)
        return stops

    @staticmethod
    def _normalize(query: str) -> str:
        if not isinstance(query, str):
            raise InvalidKeyError("Stop query must be a string", key=None)
        key = normalize_stop_name(query)
        if not key:
            raise InvalidKeyError("Stop query must not be blank", key=query)
        return key
