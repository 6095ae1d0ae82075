"""Bucketed hash table with open chaining.

Keys are strings, values are opaque.  Iteration follows bucket order, which
depends only on the keys and the bucket count, so a table built the same way
always serialises the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

DEFAULT_BUCKETS = 37

_MASK = 0xFFFFFFFF


def djb2(key: str) -> int:
    """32-bit djb2 hash over the UTF-8 bytes of *key*."""
    h = 0
    for byte in key.encode("utf-8"):
        h = ((h << 5) + h + byte) & _MASK
    return h


@dataclass(slots=True)
class _Node:
    key: str
    value: Any
    next: "_Node | None" = None


class HashTable:
    """Mapping from string keys to values, chained per bucket."""

    def __init__(self, n_buckets: int = DEFAULT_BUCKETS) -> None:
        if n_buckets < 1:
            raise ValueError("n_buckets must be positive")
        self._buckets: list[_Node | None] = [None] * n_buckets
        self._count = 0

    # -- Core operations ------------------------------------------------

    def insert_or_update(self, key: str, value: Any) -> None:
        idx = self._index(key)
        node = self._buckets[idx]
        while node is not None:
            if node.key == key:
                node.value = value
                return
            node = node.next
        self._buckets[idx] = _Node(key, value, self._buckets[idx])
        self._count += 1

    def find(self, key: str) -> Any | None:
        node = self._buckets[self._index(key)]
        while node is not None:
            if node.key == key:
                return node.value
            node = node.next
        return None

    def remove(self, key: str) -> bool:
        """Delete *key*.  Returns False when it was not present."""
        idx = self._index(key)
        prev: _Node | None = None
        node = self._buckets[idx]
        while node is not None:
            if node.key == key:
                if prev is None:
                    self._buckets[idx] = node.next
                else:
                    prev.next = node.next
                self._count -= 1
                return True
            prev, node = node, node.next
        return False

    def for_each(self) -> Iterator[tuple[str, Any]]:
        """Yield ``(key, value)`` pairs in bucket order."""
        for head in self._buckets:
            node = head
            while node is not None:
                yield node.key, node.value
                node = node.next

    def release(self) -> None:
        """Drop every entry; the table stays usable."""
        self._buckets = [None] * len(self._buckets)
        self._count = 0

    def resize(self, n_buckets: int) -> None:
        """Rehash every entry into *n_buckets* buckets."""
        if n_buckets < 1:
            raise ValueError("n_buckets must be positive")
        entries = list(self.for_each())
        self._buckets = [None] * n_buckets
        self._count = 0
        # Reinserting in reverse keeps each chain's relative order
        for key, value in reversed(entries):
            self.insert_or_update(key, value)

    # -- Python protocol ------------------------------------------------

    @property
    def n_buckets(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        node = self._buckets[self._index(key)]
        while node is not None:
            if node.key == key:
                return True
            node = node.next
        return False

    def __iter__(self) -> Iterator[str]:
        for key, _ in self.for_each():
            yield key

    def _index(self, key: str) -> int:
        return djb2(key) % len(self._buckets)
