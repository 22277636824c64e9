"""Exception hierarchy for the Bloom filter package."""

from __future__ import annotations


class BloomFilterError(Exception):
    """Base exception for all Bloom filter errors."""
    pass


class InvalidParameters(BloomFilterError, ValueError):
    """Raised when a filter or sizing helper gets degenerate parameters."""
    pass


class CapacityExceeded(BloomFilterError, MemoryError):
    """Raised when the requested bit array cannot be represented in memory."""
    pass
