"""Unit tests for the readers-writer lock and the thread-safe filter."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from edh_bloom.bloom_filter import BloomFilter
from edh_bloom.concurrent import ConcurrentBloomFilter
from edh_bloom.errors import InvalidParameters
from edh_bloom.rwlock import RWLock


def test_rwlock_readers_share():
    """Test two readers can hold the lock at once."""
    lock = RWLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader():
        with lock.read_locked():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not both_inside.broken


def test_rwlock_writer_excludes_readers():
    """Test a reader waits for an in-flight writer."""
    lock = RWLock()
    events = []
    lock.acquire_write()

    def reader():
        with lock.read_locked():
            events.append("read")

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    events.append("write-done")
    lock.release_write()
    t.join(timeout=5)

    assert events == ["write-done", "read"]


def test_rwlock_waiting_writer_blocks_new_readers():
    """Test a queued writer goes before readers arriving after it."""
    lock = RWLock()
    events = []
    lock.acquire_read()

    def writer():
        with lock.write_locked():
            events.append("write")

    def late_reader():
        with lock.read_locked():
            events.append("read")

    w = threading.Thread(target=writer)
    w.start()
    time.sleep(0.05)
    r = threading.Thread(target=late_reader)
    r.start()
    time.sleep(0.05)
    assert events == []

    lock.release_read()
    w.join(timeout=5)
    r.join(timeout=5)
    assert events == ["write", "read"]


def test_rwlock_release_without_acquire():
    lock = RWLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_concurrent_filter_is_a_bloom_filter():
    bf = ConcurrentBloomFilter(1000, 3)
    assert isinstance(bf, BloomFilter)
    assert repr(bf) == "ConcurrentBloomFilter(m=1000, k=3)"


def test_concurrent_filter_degenerate_construction():
    with pytest.raises(InvalidParameters):
        ConcurrentBloomFilter(0, 3)


def test_concurrent_filter_matches_plain_filter():
    """Test the guarded filter sets exactly the same bits."""
    plain = BloomFilter(4096, 4)
    guarded = ConcurrentBloomFilter(4096, 4)
    keys = [f'key{i}'.encode() for i in range(300)]
    plain.update(keys)
    guarded.update(keys)
    assert plain.bit_array.tobytes() == guarded.bit_array.tobytes()


def test_concurrent_filter_parallel_adds_no_false_negatives():
    """Test concurrent producers lose no insertions."""
    bf = ConcurrentBloomFilter.from_capacity(20_000, 0.01)
    chunks = [[f'{w}-{i}'.encode() for i in range(2500)] for w in range(8)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(bf.update, chunks))

    for chunk in chunks:
        for key in chunk:
            assert key in bf


def test_concurrent_filter_readers_and_writers():
    """Test concurrent tests during adds never miss a key added beforehand."""
    bf = ConcurrentBloomFilter(100_000, 5)
    seeded = [f'seed{i}'.encode() for i in range(1000)]
    bf.update(seeded)
    misses = []

    def producer(w):
        bf.update(f'new{w}-{i}'.encode() for i in range(1000))

    def consumer(_):
        misses.extend(key for key in seeded if key not in bf)

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(producer, w) for w in range(4)]
        futures += [pool.submit(consumer, r) for r in range(4)]
        for future in futures:
            future.result()

    assert misses == []


def test_concurrent_filter_clear():
    bf = ConcurrentBloomFilter(1000, 3)
    bf.add(b'key')
    bf.clear()
    assert b'key' not in bf
    assert bf.fill_ratio() == 0.0
