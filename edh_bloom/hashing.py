"""Two-value hashers for enhanced double hashing.

A hasher is any callable ``(bytes) -> (x, y)`` returning two unsigned
64-bit integers. The filter derives all ``k`` bit offsets from that pair,
so the two values should be decorrelated: either two halves of one wide
digest or two different hash families.

Every hasher here is a pure function of its input and keeps no state
between calls, so one hasher can be shared by any number of filters and
threads.
"""

from __future__ import annotations

from typing import Callable, Tuple, Union

import mmh3
import xxhash

from .errors import InvalidParameters

MASK64 = (1 << 64) - 1

Hasher = Callable[[bytes], Tuple[int, int]]
Item = Union[bytes, bytearray, memoryview, str]


def to_bytes(item: Item) -> bytes:
    """Return the byte representation used for hashing ``item``."""
    if isinstance(item, bytes):
        return item
    if isinstance(item, (bytearray, memoryview)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    raise TypeError(f"expected bytes-like or str, got {type(item).__name__}")


def xxh3_128_split(data: bytes) -> Tuple[int, int]:
    """Split one XXH3-128 digest into its high and low 64-bit halves."""
    digest = xxhash.xxh3_128_intdigest(data)
    return digest >> 64, digest & MASK64


def murmur3_128_split(data: bytes) -> Tuple[int, int]:
    """Both halves of MurmurHash3 x64_128."""
    return mmh3.hash64(data, 0, signed=False)


def mmh3_xxh64(data: bytes) -> Tuple[int, int]:
    """MurmurHash3 for ``x`` and xxHash64 for ``y`` (two independent families)."""
    x = mmh3.hash64(data, 0, signed=False)[0]
    y = xxhash.xxh64_intdigest(data)
    return x, y


def seeded_xxh64_pair(seed_x: int = 0, seed_y: int = 1) -> Hasher:
    """Return a hasher running xxHash64 twice under two different seeds."""
    if seed_x == seed_y:
        raise InvalidParameters("seed_x and seed_y must differ")

    def _hasher(data: bytes) -> Tuple[int, int]:
        return xxhash.xxh64_intdigest(data, seed_x), xxhash.xxh64_intdigest(data, seed_y)

    _hasher.__name__ = f"xxh64_pair_{seed_x}_{seed_y}"
    return _hasher


DEFAULT_HASHER: Hasher = xxh3_128_split
