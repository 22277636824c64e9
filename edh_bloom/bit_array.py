"""Word-packed bit vector backing the Bloom filter.

Bits live in an ``array('Q')`` of unsigned 64-bit words, so bit ``i`` is
bit ``i & 63`` of word ``i >> 6``.
"""

from __future__ import annotations

import logging
import numbers
import sys
from array import array

from .errors import CapacityExceeded, InvalidParameters

logger = logging.getLogger(__name__)

WORD_BITS = 64
_LOG_WORD_BITS = 6
_WORD_MASK = WORD_BITS - 1
_ITEMSIZE = array("Q").itemsize
_CLEAR_CHUNK_WORDS = (1 << 20) // _ITEMSIZE
_ZERO_CHUNK = array("Q", bytes(_CLEAR_CHUNK_WORDS * _ITEMSIZE))


class BitArray:
    """Fixed-length bit vector of ``length_bits`` bits, all initially zero."""

    __slots__ = ("length_bits", "_words")

    def __init__(self, length_bits: int) -> None:
        if not isinstance(length_bits, numbers.Integral) or isinstance(length_bits, bool):
            raise InvalidParameters(f"length_bits must be an integer, got {length_bits!r}")
        if length_bits <= 0:
            raise InvalidParameters("length_bits must be positive")
        length_bits = int(length_bits)

        word_count = max(1, (length_bits + _WORD_MASK) >> _LOG_WORD_BITS)
        if word_count > sys.maxsize // _ITEMSIZE:
            raise CapacityExceeded(
                f"{length_bits} bits needs {word_count} words, more than this platform can address"
            )
        try:
            words = array("Q", bytes(word_count * _ITEMSIZE))
        except (MemoryError, OverflowError) as exc:
            raise CapacityExceeded(f"cannot allocate {word_count} words for {length_bits} bits") from exc

        self.length_bits = length_bits
        self._words = words
        logger.debug("Allocated bit array: %d bits in %d words", length_bits, word_count)

    def set_bit(self, offset: int) -> None:
        self._words[offset >> _LOG_WORD_BITS] |= 1 << (offset & _WORD_MASK)

    def test_bit(self, offset: int) -> bool:
        return bool(self._words[offset >> _LOG_WORD_BITS] & (1 << (offset & _WORD_MASK)))

    def clear(self) -> None:
        """Zero every word in place, one fixed-size chunk at a time."""
        words = self._words
        total = len(words)
        for start in range(0, total, _CLEAR_CHUNK_WORDS):
            end = min(start + _CLEAR_CHUNK_WORDS, total)
            if end - start == _CLEAR_CHUNK_WORDS:
                words[start:end] = _ZERO_CHUNK
            else:
                words[start:end] = _ZERO_CHUNK[:end - start]

    def popcount(self) -> int:
        """Return the number of set bits."""
        return sum(bin(word).count("1") for word in self._words if word)

    @property
    def words(self) -> array:
        """Expose the underlying array('Q') for inspection."""
        return self._words

    @property
    def nbytes(self) -> int:
        return len(self._words) * _ITEMSIZE

    def __len__(self) -> int:
        return self.length_bits
