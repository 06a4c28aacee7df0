"""Statistics for AVL trees."""
# pylint: skip-file

import os
import logging
import math
import time
from statistics import mean
from typing import Iterable, List, Optional, Tuple
from pprint import pprint
from dataclasses import asdict
from datetime import datetime
import numpy as np
from tqdm import tqdm

from avl_trees.avl_tree import (
    AVLTree,
    avl_tree_stats_,
    collect_keys,
    Stats,
)
from avl_trees.profiling import PerformanceTracker

TREE_FLAGS = (
    "is_search_tree",
    "is_balanced",
    "heights_consistent",
)


def assert_invariants(t: AVLTree, stats: Stats) -> None:
    """Check all invariants, but only log ERROR messages on failures."""
    for flag in TREE_FLAGS:
        if not getattr(stats, flag):
            logging.error("Invariant failed: %s is False", flag)

    if stats.node_count != t.size():
        logging.error(
            "Invariant failed: node_count=%d ≠ size()=%d",
            stats.node_count, t.size()
        )
    if not t.is_empty():
        if stats.height > avl_height_bound(stats.node_count):
            logging.error(
                "Invariant failed: height=%d exceeds AVL bound %.2f for n=%d",
                stats.height, avl_height_bound(stats.node_count), stats.node_count
            )


def avl_height_bound(n: int) -> float:
    """Worst-case AVL tree height for n nodes: 1.44 * log2(n + 2) - 0.328."""
    return 1.4405 * math.log2(n + 2) - 0.3277


def create_avl_tree(values: Iterable) -> AVLTree:
    """Build a tree by adding each value in order."""
    tree = AVLTree()
    tree_add = tree.add
    for value in values:
        tree_add(value)
    return tree


def random_avl_tree_of_size(n: int, rng: Optional[np.random.Generator] = None) -> AVLTree:
    """Create an AVLTree holding n distinct random integer keys."""
    if rng is None:
        rng = np.random.default_rng()

    # we need at least n unique values; 2^24 = 16 777 216 > 1 000 000
    space = 1 << 24
    if space <= n:
        raise ValueError(f"Key-space too small! Required: {n + 1}, Available: {space}")

    keys = rng.choice(space, size=n, replace=False)
    return create_avl_tree(int(k) for k in keys)


def check_keys_in_order(
    tree: AVLTree,
    expected_keys: Optional[List] = None
) -> Tuple[List, bool, bool]:
    """
    Traverse the tree in order exactly once, then compute two invariants:
      1. presence_ok: if `expected_keys` is provided, do we have exactly that set of keys?
                      otherwise always True.
      2. order_ok: are the keys in strictly increasing comparator order?

    Returns:
        (keys, presence_ok, order_ok)
    """
    keys = collect_keys(tree)
    compare = tree.comparator

    order_ok = all(compare(a, b) < 0 for a, b in zip(keys, keys[1:]))

    presence_ok = True
    if expected_keys is not None:
        if len(keys) != len(expected_keys):
            presence_ok = False
        else:
            presence_ok = set(keys) == set(expected_keys)

    return keys, presence_ok, order_ok


def repeated_experiment(
        size: int,
        repetitions: int,
        rng: Optional[np.random.Generator] = None,
    ) -> List[Tuple[Stats, int]]:
    """
    Repeatedly builds random AVLTrees with `size` items and aggregates height
    statistics, rotation counts and timings over all trees.
    """
    if rng is None:
        rng = np.random.default_rng()
    tracker = PerformanceTracker.get_instance()
    t_all_0 = time.perf_counter()

    results = []  # List of tuples: (stats, rotations)
    times_build = []
    times_stats = []

    for _ in tqdm(range(repetitions), desc=f"n={size}", unit="tree"):
        tracker.reset()
        tracker.enable()
        t0 = time.perf_counter()
        tree = random_avl_tree_of_size(size, rng)
        times_build.append(time.perf_counter() - t0)
        tracker.disable()
        rotations = tracker.rotation_count

        t0 = time.perf_counter()
        stats = avl_tree_stats_(tree)
        times_stats.append(time.perf_counter() - t0)

        results.append((stats, rotations))
        assert_invariants(tree, stats)

    # Perfect height: ceil( log2(size + 1) )
    perfect_height = math.ceil(math.log2(size + 1)) if size > 0 else 0
    bound = avl_height_bound(size)

    heights = np.array([s.height for s, _ in results], dtype=float)
    rotations = np.array([r for _, r in results], dtype=float)
    amps = heights / perfect_height if perfect_height else np.zeros_like(heights)

    rows = [
        ("Node count",           mean(s.node_count for s, _ in results), None),
        ("Height",               heights.mean(),          heights.var()),
        ("Perfect height",       perfect_height,          None),
        ("AVL height bound",     bound,                   None),
        ("Height amplification", amps.mean(),             amps.var()),
        ("Rotations",            rotations.mean(),        rotations.var()),
        ("Rotations per add",    rotations.mean() / size if size else 0, None),
    ]

    header = f"{'Metric':<22} {'Avg':>15} {'(Var)':>15}"
    sep_line = "-" * len(header)

    logging.info(header)
    logging.info(sep_line)
    for name, avg, var in rows:
        if var is None:
            logging.info(f"{name:<22} {avg:>15.2f}")
        else:
            var_str = f"({var:.2f})"
            logging.info(f"{name:<22} {avg:15.2f} {var_str:>15}")

    sum_build = sum(times_build)
    sum_stats = sum(times_stats)
    total_sum = sum_build + sum_stats

    pct_build = (sum_build / total_sum * 100) if total_sum else 0
    pct_stats = (sum_stats / total_sum * 100) if total_sum else 0

    perf_rows = [
        ("Build time (s)", mean(times_build), sum_build, pct_build),
        ("Stats time (s)", mean(times_stats), sum_stats, pct_stats),
    ]

    header = f"{'Metric':<22}{'Avg(s)':>13}{'Total(s)':>13}{'%Total':>10}"
    sep = "-" * len(header)

    logging.info("")
    logging.info("Performance summary:")
    logging.info(header)
    logging.info(sep)
    for name, avg, total, pct in perf_rows:
        logging.info(
            f"{name:<22}"
            f"{avg:13.6f}"
            f"{total:13.6f}"
            f"{pct:10.2f}%"
        )

    logging.info(sep)
    logging.info("Execution time: %.3f seconds", time.perf_counter() - t_all_0)
    return results


if __name__ == "__main__":
    log_dir = os.path.join(os.getcwd(), "stats/logs")
    os.makedirs(log_dir, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"run_{ts}.log")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_path, mode="w"),
            logging.StreamHandler()
        ]
    )

    sizes = [10, 100, 1000, 10_000]
    repetitions = 10

    for n in sizes:
        logging.info("")
        logging.info(f"---------------- NOW RUNNING EXPERIMENT: n = {n}, repetitions = {repetitions} ----------------")
        t0 = time.perf_counter()
        results = repeated_experiment(size=n, repetitions=repetitions)
        elapsed = time.perf_counter() - t0
        print("Last tree stats:")
        pprint(asdict(results[-1][0]))
        logging.info(f"Total experiment time: {elapsed:.3f} seconds")
