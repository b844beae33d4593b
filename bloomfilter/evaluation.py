"""Bloom filter evaluation suite.

Generates synthetic unique items, performs a deterministic 80/20 split,
builds a filter sized for the 80% training set with
``BloomFilter.with_false_positive_rate`` and runs five checks:

1. Membership on the training set (should be all present)
2. False positive rate on the held-out set (items never inserted)
3. Collision analysis using simple modifications of held-out items
4. Filter properties and memory usage
5. Insertion and query throughput

Run with::

    python -m bloomfilter.evaluation
"""
from __future__ import annotations

import random
import time
import uuid
from typing import Optional, Tuple

from .bloom_filter import BloomFilter


NUM_ITEMS = 100_000
FALSE_POSITIVE_RATE = 0.01
QUERY_OPS = 1_000_000
RANDOM_SEED = 1


def generate_synthetic_data(n: int = NUM_ITEMS, seed: int = RANDOM_SEED) -> list[str]:
    """Generate ``n`` unique random strings, reproducible for a given seed."""
    rng = random.Random(seed)
    # UUIDs are virtually guaranteed to be unique
    return [str(uuid.UUID(int=rng.getrandbits(128), version=4)) for _ in range(n)]


def build_split(
    items: Optional[list[str]] = None,
    p: float = FALSE_POSITIVE_RATE,
) -> Tuple[BloomFilter, list[str], list[str]]:
    """Create a deterministic 80/20 split and build the bloom filter.

    Returns (bloom_filter, training_items, test_items).
    """
    if items is None:
        items = generate_synthetic_data()

    split = int(len(items) * 0.8)
    train = items[:split]
    test = items[split:]

    bloom = BloomFilter.with_false_positive_rate(max(1, len(train)), p)
    bloom.update(train)

    return bloom, train, test


def measure_membership(bloom: BloomFilter, train: list[str]) -> int:
    """Verify all training items are present in the filter."""
    print("CHECK A: Membership on training set")
    missing = [w for w in train if w not in bloom]
    print(f"  Training items: {len(train)}")
    print(f"  Missing after insertion: {len(missing)} (expected 0)")
    if missing:
        print(f"  Example missing: {missing[:5]}")
    print()
    return len(missing)


def measure_false_positive_rate(bloom: BloomFilter, train: list[str], test: list[str]) -> Optional[float]:
    """Measure empirical false positive rate on the held-out set."""
    print("CHECK B: False positive rate on held-out items")
    train_set = set(train)
    held_out = [w for w in test if w not in train_set]

    if not held_out:
        print("  No held-out items available for testing.")
        return None

    false_positives = sum(1 for w in held_out if w in bloom)
    fpr = false_positives / len(held_out)
    expected = bloom.expected_false_positive_rate(len(train))

    print(f"  Held-out items: {len(held_out)}")
    print(f"  False positives: {false_positives}")
    print(f"  Empirical FPR: {fpr:.6f} ({fpr*100:.4f}%)")
    print(f"  Expected FPR:  {expected:.6f} ({expected*100:.4f}%)")
    print()
    return fpr


def measure_collisions(bloom: BloomFilter, train: list[str], test: list[str]) -> Optional[float]:
    """Analyze collision rate using simple modifications of held-out items."""
    print("CHECK C: Collision analysis with near-miss variants of held-out items")
    variants = []
    for item in test[:500]:
        variants.append(item + "x")
        if len(item) > 1:
            variants.append(item[:-1] + "z")
        variants.append("x" + item)

    # Remove any accidental real items
    known = set(train) | set(test)
    variants = [v for v in variants if v not in known]

    if not variants:
        print("  No variants available for testing.")
        return None

    false_positives = sum(1 for v in variants if v in bloom)
    rate = false_positives / len(variants)

    print(f"  Variants tested: {len(variants)}")
    print(f"  False positives from variants: {false_positives}")
    print(f"  Collision rate: {rate:.6f} ({rate*100:.4f}%)")
    print()
    return rate


def show_properties(bloom: BloomFilter, train: list[str]) -> None:
    """Display filter memory and configuration properties."""
    print("CHECK D: Filter properties")
    bytes_len = len(bloom.bit_array)
    mb = bytes_len / (1024 * 1024)

    print(f"  Filter size (bits): {bloom.size}")
    print(f"  Filter size (bytes): {bytes_len}")
    print(f"  Filter size (MB): {mb:.2f}")
    print(f"  Number of hash functions: {bloom.num_hashes}")
    print(f"  Bits set: {bloom.bit_count()} ({bloom.bit_count() / bloom.size:.2%} fill)")
    print(f"  Items inserted: {len(train)}")
    if train:
        print(f"  Bytes per item: {bytes_len / len(train):.4f}")
    print()


def measure_performance(bloom: BloomFilter, train: list[str], test: list[str], query_ops: int = QUERY_OPS) -> dict:
    """Measure insertion and query throughput (ops/sec)."""
    print("CHECK E: Performance benchmarking")

    # Fresh filter with the same configuration so insert timing starts empty
    bench_filter = BloomFilter(bloom.size, bloom.num_hashes, seed1=bloom.seed1, seed2=bloom.seed2)

    start_time = time.perf_counter()
    for item in train:
        bench_filter.add(item)
    insert_time = time.perf_counter() - start_time
    insert_ops_per_sec = len(train) / insert_time if insert_time > 0 else float("inf")
    print(f"    - Inserted {len(train)} items in {insert_time:.4f} sec")
    print(f"    - Insertion throughput: {insert_ops_per_sec:,.0f} ops/sec")

    queries = test or train
    repeats = (query_ops // max(1, len(queries))) + 1
    query_set = (queries * repeats)[:query_ops]

    start_time = time.perf_counter()
    for item in query_set:
        _ = item in bench_filter
    query_time = time.perf_counter() - start_time
    query_ops_per_sec = len(query_set) / query_time if query_time > 0 else float("inf")
    print(f"    - Performed {len(query_set)} queries in {query_time:.4f} sec")
    print(f"    - Query throughput: {query_ops_per_sec:,.0f} ops/sec")
    print()

    return {
        "insert_count": len(train),
        "insert_time": insert_time,
        "insert_ops_per_sec": insert_ops_per_sec,
        "query_count": len(query_set),
        "query_time": query_time,
        "query_ops_per_sec": query_ops_per_sec,
    }


def run_all() -> None:
    """Run every check."""
    items = generate_synthetic_data()
    print(f"Synthetic unique items: {len(items)}")

    print("=" * 60)
    print(f"Running Bloom Filter Evaluation (80/20 split, p={FALSE_POSITIVE_RATE})")
    print("=" * 60)
    print()

    bloom, train, test = build_split(items)
    print(f"Filter: {bloom!r}")
    print()

    measure_membership(bloom, train)
    measure_false_positive_rate(bloom, train, test)
    measure_collisions(bloom, train, test)
    show_properties(bloom, train)
    measure_performance(bloom, train, test)

    print("=" * 60)
    print("Evaluation completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    run_all()
