"""Thread-safe Bloom filter guarded by one readers-writer lock.

Offsets are derived into a list local to the calling thread before the
lock is taken, so only the bit-array access is serialized. ``add`` and
``clear`` hold the write lock; ``test`` holds the read lock, so tests run
in parallel with each other but never observe a half-applied ``add``.
"""
from __future__ import annotations

from typing import Iterable

from .bloom_filter import BloomFilter
from .hashing import DEFAULT_HASHER, Hasher, Item
from .rwlock import RWLock


class ConcurrentBloomFilter(BloomFilter):
    """:class:`BloomFilter` safe to share between threads."""

    __slots__ = ("_lock",)

    def __init__(self, m: int, k: int, *, hasher: Hasher = DEFAULT_HASHER) -> None:
        super().__init__(m, k, hasher=hasher)
        self._lock = RWLock()

    def add(self, item: Item) -> None:
        offsets = list(self.offsets(item))
        set_bit = self._bits.set_bit
        with self._lock.write_locked():
            for offset in offsets:
                set_bit(offset)

    def update(self, items: Iterable[Item]) -> None:
        """Insert all ``items``; each element is applied atomically on its own."""
        for item in items:
            self.add(item)

    def test(self, item: Item) -> bool:
        offsets = list(self.offsets(item))
        test_bit = self._bits.test_bit
        with self._lock.read_locked():
            for offset in offsets:
                if not test_bit(offset):
                    return False
        return True

    __contains__ = test

    def clear(self) -> None:
        with self._lock.write_locked():
            super().clear()

    def fill_ratio(self) -> float:
        with self._lock.read_locked():
            return super().fill_ratio()
