"""
avl_trees - A self-balancing AVL tree implementing an ordered set.
"""

from avl_trees.base import (
    AbstractSortedSet,
    AbstractSelfBalancingSortedSet,
    AVLTreeError,
    InvalidArgumentError,
    EmptyTreeError,
    UnbalancedTreeError,
    natural_order,
)
from avl_trees.avl_tree import (
    AVLNode,
    AVLTree,
    Stats,
    avl_tree_stats_,
    collect_keys,
)
from avl_trees.profiling import PerformanceTracker, track_performance

__all__ = [
    'AbstractSortedSet',
    'AbstractSelfBalancingSortedSet',
    'AVLTreeError',
    'InvalidArgumentError',
    'EmptyTreeError',
    'UnbalancedTreeError',
    'natural_order',
    'AVLNode',
    'AVLTree',
    'Stats',
    'avl_tree_stats_',
    'collect_keys',
    'PerformanceTracker',
    'track_performance',
]
