"""Utility functions for testing AVLTree invariants."""

from avl_trees.avl_tree import (
    AVLTree,
    Stats
)

TREE_FLAGS = (
    "is_search_tree",
    "is_balanced",
    "heights_consistent",
)

def assert_tree_invariants_tc(tc, t: AVLTree, stats: Stats) -> None:
    """TestCase version: use inside unittest.TestCase methods."""
    for flag in TREE_FLAGS:
        tc.assertTrue(
            getattr(stats, flag),
            f"Invariant failed: {flag} is False\n{t.print_structure()}"
        )

    tc.assertEqual(
        stats.node_count, t.size(),
        f"Invariant failed: node_count={stats.node_count} ≠ size()={t.size()}"
    )
    tc.assertLessEqual(
        stats.max_imbalance, 1,
        f"Invariant failed: max_imbalance={stats.max_imbalance} > 1"
    )

    if t.is_empty():
        tc.assertIsNone(t.root, "Invariant failed: empty tree has a root")
        tc.assertEqual(stats.height, 0)
        return

    tc.assertGreater(
        stats.height, 0,
        f"Invariant failed: height={stats.height} ≤ 0 for non-empty tree"
    )
    tc.assertEqual(
        stats.height, t.height(),
        f"Invariant failed: height={stats.height} ≠ cached root height={t.height()}"
    )
    tc.assertEqual(
        stats.least_item, t.first(),
        f"Invariant failed: least_item={stats.least_item!r} ≠ first()={t.first()!r}"
    )
    tc.assertEqual(
        stats.greatest_item, t.last(),
        f"Invariant failed: greatest_item={stats.greatest_item!r} ≠ last()={t.last()!r}"
    )
