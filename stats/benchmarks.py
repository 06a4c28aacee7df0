#!/usr/bin/env python3
"""
Benchmarks for the AVL tree data structure.

This script measures:
 1. Full AVLTree build times (random_avl_tree_of_size)
 2. avl_tree_stats_ of a large random tree
 3. Per-add, per-contains and per-remove cost into trees of various sizes

Usage:
    python -m stats.benchmarks [--space S] [--sizes 100 1000 10000] [--trials T] [--seed N]
"""
import argparse
import time
import gc
from pprint import pprint
from dataclasses import asdict
from statistics import mean, variance

import numpy as np

from avl_trees.avl_tree import AVLTree, avl_tree_stats_
from stats.stats_avl_tree import random_avl_tree_of_size


def bench_build_tree(sizes: list, rng: np.random.Generator) -> None:
    """Measure random_avl_tree_of_size for various sizes."""
    for n in sizes:
        t0 = time.perf_counter()
        _ = random_avl_tree_of_size(n, rng)
        elapsed = time.perf_counter() - t0
        print(f"[bench] random_avl_tree_of_size({n}): {elapsed:.4f}s")


def bench_tree_stats(n: int, rng: np.random.Generator) -> None:
    """Build a single random tree and print its stats."""
    tree = random_avl_tree_of_size(n, rng)
    stats = avl_tree_stats_(tree)
    print(f"[bench] random_avl_tree_of_size({n}) stats:")
    pprint(asdict(stats))


def _timed(op, trees, keys) -> list:
    gc.collect()
    gc.disable()
    try:
        times = []
        for tree, key in zip(trees, keys):
            t0 = time.perf_counter()
            op(tree, key)
            times.append(time.perf_counter() - t0)
    finally:
        gc.enable()
    return times


def measure_single_ops(
    n: int, space: int, trials: int, rng: np.random.Generator
) -> dict:
    """
    Measure per-operation cost on trees of exactly `n` items,
    averaged over `trials` independent trees.
    Returns {operation: (mean_time_s, variance_time_s)}.
    """
    trees = [random_avl_tree_of_size(n, rng) for _ in range(trials)]
    keys = [int(k) for k in rng.choice(space, size=trials, replace=False)]

    results = {}
    for name, op in (
        ("contains", AVLTree.contains),
        ("add", AVLTree.add),
        ("remove", AVLTree.remove),
    ):
        times = _timed(op, trees, keys)
        results[name] = (mean(times), variance(times) if len(times) > 1 else 0.0)
    return results


def bench_single_ops(sizes: list, space: int, trials: int, rng: np.random.Generator) -> None:
    """Run measure_single_ops for each size and print results."""
    for n in sizes:
        results = measure_single_ops(n, space, trials, rng)
        for name, (avg, var) in results.items():
            print(
                f"[bench] {name:<8} on size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )


def main():
    parser = argparse.ArgumentParser(description="AVLTree benchmarks")
    parser.add_argument("--space", type=int, default=1 << 24,
                        help="Key space for random keys")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes for single-operation benchmarks")
    parser.add_argument("--trials", type=int, default=100,
                        help="Number of trials for single-operation benchmarks")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the random generator")
    args = parser.parse_args()
    rng = np.random.default_rng(args.seed)

    print("\n=== Full AVLTree Build ===")
    bench_build_tree([10, 100, 1000, 10_000, 100_000], rng)

    print("\n=== random_avl_tree_of_size Stats ===")
    bench_tree_stats(100_000, rng)

    AVLTree.reset_performance_metrics()
    AVLTree.enable_performance_tracking()

    print("\n=== Single-Operation Benchmarks ===")
    bench_single_ops(args.sizes, args.space, args.trials, rng)

    print("\n=== Method-Level Performance Breakdown ===")
    print(AVLTree.get_performance_report())
    AVLTree.disable_performance_tracking()
    AVLTree.reset_performance_metrics()


if __name__ == "__main__":
    main()
