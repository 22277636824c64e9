"""Bloom filter benchmark and accuracy report.

Inserts the even integers ``0, 2, 4, ...`` (encoded as 8-byte varints) into
a filter with ``m/n`` bits per element, then probes the odd integers, and
reports for each hasher plus the thread-safe wrapper:

1. Membership on the inserted set (should be all present)
2. Empirical false positive rate against the analytic estimate
3. Filter properties and memory usage
4. Insert/query throughput

Finally prints the m/n vs k false positive table used to pick ``k``.

Run with::

    python -m benchmarks.suite
"""
from __future__ import annotations

import time
from typing import Any, Callable, List, Optional, Tuple

from edh_bloom.bloom_filter import BloomFilter
from edh_bloom.concurrent import ConcurrentBloomFilter
from edh_bloom.hashing import Hasher, mmh3_xxh64, murmur3_128_split, seeded_xxh64_pair, xxh3_128_split
from edh_bloom.keys import varint_key
from edh_bloom.sizing import estimated_fpr, optimal_k


NUM_ITEMS = 1_000_000
BITS_PER_ITEM = 20
NUM_HASHES = 5

HASHERS: List[Tuple[str, Hasher]] = [
    ("xxh3-128 split", xxh3_128_split),
    ("murmur3-128 split", murmur3_128_split),
    ("mmh3 + xxh64", mmh3_xxh64),
    ("xxh64 seed pair", seeded_xxh64_pair(0, 1)),
]


def build_split(n: int = NUM_ITEMS) -> Tuple[list[bytes], list[bytes]]:
    """Return (inserted, probes): even- and odd-valued varint keys below ``n``."""
    inserted = [varint_key(i) for i in range(0, n, 2)]
    probes = [varint_key(i) for i in range(1, n, 2)]
    return inserted, probes


def check_membership(bloom: BloomFilter, inserted: list[bytes]) -> int:
    """Verify all inserted items are present in the filter."""
    print("A: Membership on inserted set")
    missing = sum(1 for key in inserted if key not in bloom)
    print(f"  Inserted items: {len(inserted)}")
    print(f"  Missing after insertion: {missing} (expected 0)")
    print()
    return missing


def measure_false_positives(bloom: BloomFilter, inserted: list[bytes], probes: list[bytes]) -> float:
    """Measure the empirical false positive rate on never-inserted probes."""
    print("B: False positive rate on probes")
    false_positives = sum(1 for key in probes if key in bloom)
    fpr = false_positives / len(probes)
    estimate = bloom.estimate_fpr(len(inserted))

    print(f"  Probes: {len(probes)}")
    print(f"  False positives: {false_positives}")
    print(f"  Empirical FPR: {fpr:.6f} ({fpr*100:.4f}%)")
    print(f"  Estimated FPR: {estimate:.6f} ({estimate*100:.4f}%)")
    print(f"  Fill ratio: {bloom.fill_ratio():.4f}")
    print()
    return fpr


def show_properties(bloom: BloomFilter, inserted: list[bytes]) -> None:
    """Display filter memory and configuration properties."""
    print("C: Filter properties")
    bytes_len = len(bloom.bit_array) * bloom.bit_array.itemsize
    mb = bytes_len / (1024 * 1024)

    print(f"  Filter size (bits): {bloom.m}")
    print(f"  Filter size (bytes): {bytes_len}")
    print(f"  Filter size (MB): {mb:.2f}")
    print(f"  Number of hash functions: {bloom.k}")
    print(f"  Items inserted: {len(inserted)}")
    print(f"  Bytes per item: {bytes_len / len(inserted):.4f}")
    print()


def _ops_per_sec(count: int, elapsed: float) -> float:
    return count / elapsed if elapsed > 0 else float("inf")


def measure_performance(factory: Callable[[], BloomFilter], inserted: list[bytes], probes: list[bytes]) -> dict:
    """Measure insertion and query throughput (ops/sec) on a fresh filter."""
    print("D: Performance")
    bench_filter = factory()

    start_time = time.perf_counter()
    for key in inserted:
        bench_filter.add(key)
    insert_time = time.perf_counter() - start_time
    insert_ops = _ops_per_sec(len(inserted), insert_time)
    print(f"    - Inserted {len(inserted)} items in {insert_time:.4f} sec")
    print(f"    - Insertion Throughput: {insert_ops:,.0f} ops/sec")

    start_time = time.perf_counter()
    for key in probes:
        _ = key in bench_filter
    query_time = time.perf_counter() - start_time
    query_ops = _ops_per_sec(len(probes), query_time)
    print(f"    - Performed {len(probes)} queries in {query_time:.4f} sec")
    print(f"    - Query Throughput: {query_ops:,.0f} ops/sec")
    print()

    return {
        "insert_count": len(inserted),
        "insert_time": insert_time,
        "insert_ops_per_sec": insert_ops,
        "query_count": len(probes),
        "query_time": query_time,
        "query_ops_per_sec": query_ops,
    }


def compare_performance(results: dict[str, dict]) -> None:
    """Print a compact side-by-side comparison against the first variant."""
    def fmt(val: Any) -> str:
        if val is None:
            return 'N/A'
        if isinstance(val, float):
            if val == float('inf'):
                return 'inf'
            if abs(val) >= 1000:
                return f"{val:,.0f}"
            return f"{val:,.6f}" if abs(val) < 0.01 else f"{val:,.2f}"
        return str(val)

    def pct_change(a: Optional[float], b: Optional[float]) -> Optional[float]:
        if a is None or b is None or a == 0:
            return None
        return (b - a) / a * 100

    names = list(results)
    baseline = results[names[0]]
    print(f"{'Variant':<26}{'Insert ops/s':>16}{'Query ops/s':>16}{'FPR':>12}{'Query diff':>12}")
    print('-' * 82)
    for name in names:
        row = results[name]
        diff = pct_change(baseline.get('query_ops_per_sec'), row.get('query_ops_per_sec'))
        diff_str = f"{diff:+.2f}%" if diff is not None else 'N/A'
        print(
            f"{name:<26}{fmt(row.get('insert_ops_per_sec')):>16}"
            f"{fmt(row.get('query_ops_per_sec')):>16}{fmt(row.get('fpr')):>12}{diff_str:>12}"
        )
    print()


def print_fpr_table(n: float = 1e6, bits_per_item: range = range(8, 20), max_k: int = 8) -> None:
    """Print analytic FPR at the optimal k and at k = 1..max_k for each m/n."""
    print("m/n vs k: analytic false positive rates")
    for b in bits_per_item:
        m = b * n
        k_opt = optimal_k(m, n)
        fpr_opt = estimated_fpr(m, n, k_opt)
        cells = "  ".join(f"k={k}:{estimated_fpr(m, n, k)*100:6.2f}%" for k in range(1, max_k + 1))
        print(f"  m/n = {b:2d}, k* = {k_opt:4.1f}, fpr(k*) = {fpr_opt*100:6.2f}%  {cells}")
    print()


def run_variant(name: str, factory: Callable[[], BloomFilter], inserted: list[bytes], probes: list[bytes]) -> dict:
    print("=" * 60)
    print(f"Running {name}")
    print("=" * 60)
    print()

    bloom = factory()
    bloom.update(inserted)

    check_membership(bloom, inserted)
    fpr = measure_false_positives(bloom, inserted, probes)
    show_properties(bloom, inserted)
    metrics = measure_performance(factory, inserted, probes)
    metrics["fpr"] = fpr
    return metrics


def run_all(n: int = NUM_ITEMS) -> None:
    """Run every variant and print the summary."""
    inserted, probes = build_split(n)
    m = BITS_PER_ITEM * len(inserted)
    print(f"Items: {len(inserted)} inserted, {len(probes)} probes, m={m}, k={NUM_HASHES}")
    print()

    results: dict[str, dict] = {}
    for name, hasher in HASHERS:
        results[name] = run_variant(
            name, lambda hasher=hasher: BloomFilter(m, NUM_HASHES, hasher=hasher), inserted, probes
        )
    results["concurrent (xxh3-128)"] = run_variant(
        "concurrent (xxh3-128)", lambda: ConcurrentBloomFilter(m, NUM_HASHES), inserted, probes
    )

    print("=" * 60)
    print("COMPARISON: Performance Summary")
    print("=" * 60)
    compare_performance(results)

    print_fpr_table()

    print("=" * 60)
    print("Benchmark suite completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    run_all()
