"""Bloom filter with enhanced double hashing over a word-packed bit array."""

from .bit_array import BitArray
from .bloom_filter import BloomFilter
from .concurrent import ConcurrentBloomFilter
from .errors import BloomFilterError, CapacityExceeded, InvalidParameters
from .hashing import (
    DEFAULT_HASHER,
    mmh3_xxh64,
    murmur3_128_split,
    seeded_xxh64_pair,
    xxh3_128_split,
)
from .sizing import BloomConfig, estimated_fpr, optimal_k, optimal_m

__all__ = [
    "BitArray",
    "BloomFilter",
    "ConcurrentBloomFilter",
    "BloomFilterError",
    "CapacityExceeded",
    "InvalidParameters",
    "DEFAULT_HASHER",
    "mmh3_xxh64",
    "murmur3_128_split",
    "seeded_xxh64_pair",
    "xxh3_128_split",
    "BloomConfig",
    "estimated_fpr",
    "optimal_k",
    "optimal_m",
]
