"""Unit tests for the two-value hashers."""

import pytest

from edh_bloom.errors import InvalidParameters
from edh_bloom.hashing import (
    MASK64,
    mmh3_xxh64,
    murmur3_128_split,
    seeded_xxh64_pair,
    to_bytes,
    xxh3_128_split,
)

HASHERS = [xxh3_128_split, murmur3_128_split, mmh3_xxh64, seeded_xxh64_pair(7, 11)]


@pytest.mark.parametrize("hasher", HASHERS)
def test_hasher_returns_two_unsigned_64bit_values(hasher):
    """Test every hasher yields a pair of u64 values."""
    for data in (b'', b'\x00', b'key1', b'x' * 1000):
        x, y = hasher(data)
        assert 0 <= x <= MASK64
        assert 0 <= y <= MASK64


@pytest.mark.parametrize("hasher", HASHERS)
def test_hasher_is_deterministic(hasher):
    """Test the same bytes always hash to the same pair."""
    assert hasher(b'element') == hasher(b'element')


@pytest.mark.parametrize("hasher", HASHERS)
def test_hasher_halves_differ(hasher):
    """Test the two values are not trivially equal."""
    pairs = [hasher(f'key{i}'.encode()) for i in range(50)]
    assert all(x != y for x, y in pairs)
    assert len(set(pairs)) == 50


def test_seeded_pair_depends_on_seeds():
    """Test different seeds produce different hashers."""
    assert seeded_xxh64_pair(0, 1)(b'abc') != seeded_xxh64_pair(2, 3)(b'abc')


def test_seeded_pair_rejects_equal_seeds():
    """Test equal seeds would give x == y and are rejected."""
    with pytest.raises(InvalidParameters):
        seeded_xxh64_pair(5, 5)


def test_to_bytes_accepts_bytes_like_and_str():
    """Test input normalization."""
    assert to_bytes(b'abc') == b'abc'
    assert to_bytes(bytearray(b'abc')) == b'abc'
    assert to_bytes(memoryview(b'abc')) == b'abc'
    assert to_bytes('abc') == b'abc'
    assert to_bytes('é') == 'é'.encode('utf-8')


def test_to_bytes_rejects_other_types():
    """Test that non-bytes, non-str input raises TypeError."""
    with pytest.raises(TypeError):
        to_bytes(42)
