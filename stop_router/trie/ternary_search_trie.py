"""Ternary search trie for ordered string-keyed lookup.

Each node holds one character, an optional value and three child links:
``lesser`` and ``greater`` lead to siblings at the same depth (a binary
search tree on the character), ``next`` continues with the following
character of the key. Nodes are stored in an arena list and refer to
their children by index, so every traversal here is iterative and long
keys never touch the interpreter recursion limit.

A key of length L is stored on the node reached after matching its L-th
character. Deleting a key only clears that node's value; the path stays.
"""

from __future__ import annotations

from typing import Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from ..domain.errors import InvalidKeyError


V = TypeVar("V")

WILDCARD = "."

# A pending traversal step is (node index, prefix so far, pattern position);
# a plain string on the stack is a key ready to be emitted.
_Step = Union[str, Tuple[int, str, int]]


class _Node(Generic[V]):
    __slots__ = ("char", "value", "lesser", "greater", "next")

    def __init__(self, char: str) -> None:
        self.char = char
        self.value: Optional[V] = None
        self.lesser: Optional[int] = None
        self.greater: Optional[int] = None
        self.next: Optional[int] = None


class TernarySearchTrie(Generic[V]):
    """String symbol table supporting prefix and wildcard queries.

    Keys are case-sensitive and compared by code point. ``None`` is not a
    storable value: putting ``None`` removes the key.

    Example:
        trie = TernarySearchTrie()
        for word in ("she", "shells", "shellsort"):
            trie.put(word, len(word))
        trie.longest_prefix_of("shell")     # "she"
        trie.keys_that_match("she..s")     # ["shells"]
    """

    def __init__(self) -> None:
        self._nodes: List[_Node[V]] = []
        self._root: Optional[int] = None
        self._size = 0

    def size(self) -> int:
        """Return the number of keys with a value."""
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    @property
    def node_count(self) -> int:
        """Number of nodes allocated in the arena."""
        return len(self._nodes)

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(key) and self.get(key) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def get(self, key: str) -> Optional[V]:
        """Return the value stored for ``key``, or ``None`` if absent.

        Raises:
            InvalidKeyError: If ``key`` is not a non-empty string.
        """
        _require_key(key, "get")
        index = self._find(key)
        if index is None:
            return None
        return self._nodes[index].value

    def put(self, key: str, value: Optional[V]) -> None:
        """Insert ``key`` with ``value``, overwriting any previous value.

        A ``None`` value removes an existing key. For a key that is not
        present the path is still created but the size is unchanged.

        Raises:
            InvalidKeyError: If ``key`` is not a non-empty string.
        """
        _require_key(key, "put")
        index = self._walk_or_create(key)
        node = self._nodes[index]
        if node.value is None and value is not None:
            self._size += 1
        elif node.value is not None and value is None:
            self._size -= 1
        node.value = value

    def delete(self, key: str) -> None:
        self.put(key, None)

    def longest_prefix_of(self, query: str) -> str:
        """Return the longest key that is a prefix of ``query``.

        Returns an empty string when no key prefixes ``query``.

        Raises:
            InvalidKeyError: If ``query`` is not a non-empty string.
        """
        _require_key(query, "longest_prefix_of")
        length = 0
        index = self._root
        i = 0
        while index is not None and i < len(query):
            node = self._nodes[index]
            c = query[i]
            if c < node.char:
                index = node.lesser
            elif c > node.char:
                index = node.greater
            else:
                i += 1
                if node.value is not None:
                    length = i
                index = node.next
        return query[:length]

    def keys(self) -> List[str]:
        """Return every key in ascending order."""
        return self._collect(self._root, "")

    def keys_with_prefix(self, prefix: str) -> List[str]:
        """Return all keys starting with ``prefix``, in ascending order.

        Raises:
            InvalidKeyError: If ``prefix`` is not a non-empty string.
        """
        _require_key(prefix, "keys_with_prefix")
        index = self._find(prefix)
        if index is None:
            return []
        node = self._nodes[index]
        found = [prefix] if node.value is not None else []
        found.extend(self._collect(node.next, prefix))
        return found

    def keys_that_match(self, pattern: str) -> List[str]:
        """Return keys of ``len(pattern)`` matching it, in ascending order.

        The character ``.`` in ``pattern`` matches any single character;
        every other character must match exactly.
        """
        if not pattern:
            return []
        return self._collect(self._root, "", pattern)

    def _find(self, key: str) -> Optional[int]:
        """Index of the node holding ``key``'s last character, if any."""
        index = self._root
        d = 0
        last = len(key) - 1
        while index is not None:
            node = self._nodes[index]
            c = key[d]
            if c < node.char:
                index = node.lesser
            elif c > node.char:
                index = node.greater
            elif d < last:
                index = node.next
                d += 1
            else:
                return index
        return None

    def _walk_or_create(self, key: str) -> int:
        if self._root is None:
            self._root = self._new_node(key[0])
        index = self._root
        d = 0
        last = len(key) - 1
        while True:
            node = self._nodes[index]
            c = key[d]
            if c < node.char:
                if node.lesser is None:
                    node.lesser = self._new_node(c)
                index = node.lesser
            elif c > node.char:
                if node.greater is None:
                    node.greater = self._new_node(c)
                index = node.greater
            elif d < last:
                d += 1
                if node.next is None:
                    node.next = self._new_node(key[d])
                index = node.next
            else:
                return index

    def _new_node(self, char: str) -> int:
        self._nodes.append(_Node(char))
        return len(self._nodes) - 1

    def _collect(
        self, start: Optional[int], prefix: str, pattern: Optional[str] = None
    ) -> List[str]:
        """In-order collection of keys below ``start``.

        Visits the ``lesser`` subtree, the node itself, the ``next``
        subtree and finally the ``greater`` subtree, which yields keys in
        ascending order. When ``pattern`` is given only branches that can
        still match it are explored and only keys of its exact length are
        emitted.
        """
        found: List[str] = []
        if start is None:
            return found
        stack: List[_Step] = [(start, prefix, 0)]
        while stack:
            step = stack.pop()
            if isinstance(step, str):
                found.append(step)
                continue
            index, path, i = step
            node = self._nodes[index]
            c = node.char
            # Pushed in reverse of visiting order.
            if pattern is None:
                if node.greater is not None:
                    stack.append((node.greater, path, i))
                if node.next is not None:
                    stack.append((node.next, path + c, i))
                if node.value is not None:
                    stack.append(path + c)
                if node.lesser is not None:
                    stack.append((node.lesser, path, i))
                continue

            p = pattern[i]
            last = len(pattern) - 1
            if node.greater is not None and (p == WILDCARD or p > c):
                stack.append((node.greater, path, i))
            if p == WILDCARD or p == c:
                if i < last and node.next is not None:
                    stack.append((node.next, path + c, i + 1))
                if i == last and node.value is not None:
                    stack.append(path + c)
            if node.lesser is not None and (p == WILDCARD or p < c):
                stack.append((node.lesser, path, i))
        return found


PrefixTrie = TernarySearchTrie


def _require_key(key: object, operation: str) -> None:
    if not isinstance(key, str):
        raise InvalidKeyError(f"calls {operation}() with a non-string key", key=None)
    if not key:
        raise InvalidKeyError(f"{operation}() requires a key of length >= 1", key=key)
