"""Bloom filter using enhanced double hashing.

Each element is hashed once into a pair of 64-bit values ``(x, y)`` by a
pluggable hasher (see :mod:`edh_bloom.hashing`). The ``k`` bit offsets are
then derived with the enhanced double hashing recurrence of Dillinger &
Manolios::

    offset_i = x mod m
    x = x + y    (mod 2^64)
    y = y + i    (mod 2^64)

The ``y + i`` term keeps the offsets from cycling when ``y`` is small or
shares a factor with ``m``. Storage is a word-packed :class:`BitArray`.
"""
from __future__ import annotations

import logging
import numbers
from array import array
from typing import Iterable, Iterator

from .bit_array import BitArray
from .errors import InvalidParameters
from .hashing import DEFAULT_HASHER, MASK64, Hasher, Item, to_bytes
from .sizing import BloomConfig, estimated_fpr

logger = logging.getLogger(__name__)


class BloomFilter:
    """Standard (insert-only) Bloom filter with ``m`` bits and ``k`` hashes."""

    __slots__ = ("m", "k", "hasher", "_bits")

    def __init__(self, m: int, k: int, *, hasher: Hasher = DEFAULT_HASHER) -> None:
        """Initialize an empty filter.

        Args:
            m: Number of bits in the filter.
            k: Number of bit offsets set/checked per element.
            hasher: Callable mapping element bytes to two 64-bit integers.

        Raises:
            InvalidParameters: If m or k is not a positive integer, or hasher is not callable.
            CapacityExceeded: If m bits cannot be allocated on this platform.
        """
        for name, value in (("m", m), ("k", k)):
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise InvalidParameters(f"{name} must be an integer, got {value!r}")
        if m <= 0:
            raise InvalidParameters("m must be positive")
        if k <= 0:
            raise InvalidParameters("k must be positive")
        if not callable(hasher):
            raise InvalidParameters("hasher must be callable")

        self.m = m = int(m)
        self.k = k = int(k)
        self.hasher = hasher
        self._bits = BitArray(m)
        logger.debug(
            "Created Bloom filter m=%d k=%d hasher=%s",
            m, k, getattr(hasher, "__name__", repr(hasher)),
        )

    @classmethod
    def from_config(cls, config: BloomConfig, *, hasher: Hasher = DEFAULT_HASHER) -> BloomFilter:
        return cls(config.num_bits, config.num_hashes_or_optimal(), hasher=hasher)

    @classmethod
    def from_capacity(
        cls,
        capacity: int,
        false_positive_rate: float = 0.01,
        *,
        hasher: Hasher = DEFAULT_HASHER,
    ) -> BloomFilter:
        """Size a filter for ``capacity`` elements at ``false_positive_rate``."""
        return cls.from_config(BloomConfig(capacity, false_positive_rate), hasher=hasher)

    def offsets(self, item: Item) -> Iterator[int]:
        """Yield the ``k`` bit offsets for ``item``, each in ``[0, m)``."""
        x, y = self.hasher(to_bytes(item))
        x &= MASK64
        y &= MASK64
        m = self.m
        for i in range(self.k):
            yield x % m
            x = (x + y) & MASK64
            y = (y + i) & MASK64

    def add(self, item: Item) -> None:
        """Insert ``item`` into the filter."""
        set_bit = self._bits.set_bit
        for offset in self.offsets(item):
            set_bit(offset)

    def update(self, items: Iterable[Item]) -> None:
        """Insert all ``items`` into the filter."""
        for item in items:
            self.add(item)

    def test(self, item: Item) -> bool:
        """Return True if ``item`` may be present, False if definitely absent."""
        test_bit = self._bits.test_bit
        for offset in self.offsets(item):
            if not test_bit(offset):
                return False
        return True

    __contains__ = test

    def clear(self) -> None:
        """Reset to the empty state, keeping ``m``, ``k`` and the hasher."""
        self._bits.clear()
        logger.debug("Cleared Bloom filter m=%d k=%d", self.m, self.k)

    def estimate_fpr(self, n: int) -> float:
        """Analytic false-positive rate after ``n`` distinct insertions."""
        return estimated_fpr(self.m, n, self.k)

    def fill_ratio(self) -> float:
        """Fraction of the ``m`` bits currently set."""
        return self._bits.popcount() / self.m

    @property
    def bit_array(self) -> array:
        """Expose the underlying array('Q') words for inspection."""
        return self._bits.words

    def __repr__(self) -> str:
        return f"{type(self).__name__}(m={self.m}, k={self.k})"
