# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""AVL tree implementation"""

from __future__ import annotations
import logging
from typing import Any, List, Optional
from dataclasses import dataclass

from avl_trees.base import (
    AbstractSelfBalancingSortedSet,
    Comparator,
    E,
    EmptyTreeError,
    InvalidArgumentError,
    UnbalancedTreeError,
    natural_order,
)
from avl_trees.profiling import (
    track_performance,
    PerformanceTracker
)

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

BALANCE_MESSAGE = (
    "The heights of the two child subtrees of any node must differ by at most one"
)


class AVLNode:
    """
    A node of an AVL tree.

    Attributes:
        value: The stored element.
        left (Optional[AVLNode]): Subtree of smaller elements.
        right (Optional[AVLNode]): Subtree of greater elements.
        height (int): Cached height of the subtree rooted here (leaf = 1).
    """
    __slots__ = ("value", "left", "right", "height")

    def __init__(
        self,
        value: Any,
        left: Optional[AVLNode] = None,
        right: Optional[AVLNode] = None,
        height: int = 1
    ) -> None:
        self.value = value
        self.left = left
        self.right = right
        self.height = height

    def __str__(self):
        return f"AVLNode(value={self.value!r}, height={self.height})"

    __repr__ = __str__


def _height(node: Optional[AVLNode]) -> int:
    return node.height if node is not None else 0


def _update_height(node: AVLNode) -> None:
    node.height = max(_height(node.left), _height(node.right)) + 1


def _balance_factor(node: Optional[AVLNode]) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _rotate_right(node: AVLNode) -> AVLNode:
    """Promote the left child into node's position."""
    pivot = node.left
    node.left = pivot.right
    pivot.right = node
    _update_height(node)
    _update_height(pivot)
    return pivot


def _rotate_left(node: AVLNode) -> AVLNode:
    """Promote the right child into node's position."""
    pivot = node.right
    node.right = pivot.left
    pivot.left = node
    _update_height(node)
    _update_height(pivot)
    return pivot


def _rebalance(node: AVLNode) -> AVLNode:
    """
    Refresh node's height and restore the AVL property at node, assuming
    both of its subtrees are already balanced with correct heights.

    Returns:
        AVLNode: The root of the (possibly rotated) subtree.
    """
    _update_height(node)
    diff = _balance_factor(node)
    tracker = PerformanceTracker.get_instance()

    if diff == 2:
        if _balance_factor(node.left) >= 0:
            logger.debug("Single right rotation at %s", node)
            tracker.record_rotation("single_right")
            return _rotate_right(node)
        logger.debug("Left-right rotation at %s", node)
        tracker.record_rotation("double_left_right")
        node.left = _rotate_left(node.left)
        return _rotate_right(node)

    if diff == -2:
        if _balance_factor(node.right) <= 0:
            logger.debug("Single left rotation at %s", node)
            tracker.record_rotation("single_left")
            return _rotate_left(node)
        logger.debug("Right-left rotation at %s", node)
        tracker.record_rotation("double_right_left")
        node.right = _rotate_right(node.right)
        return _rotate_left(node)

    return node


class AVLTree(AbstractSelfBalancingSortedSet[E]):
    """
    A sorted set backed by an AVL tree.

    Every node keeps the heights of its two subtrees within one of each
    other, so the tree height stays below ~1.44 * log2(n + 2) and add, remove
    and contains all run in O(log n).

    Attributes:
        root (Optional[AVLNode]): The root node, None for an empty tree.
        comparator (Comparator): Three-way comparison function ordering the
            elements (negative, zero or positive result).
    """
    __slots__ = ("root", "comparator", "_length")

    def __init__(self, comparator: Comparator = natural_order) -> None:
        """
        Initialize an empty AVL tree.

        Parameters:
            comparator (Comparator): Orders the elements. Defaults to the
                elements' natural ordering.

        Raises:
            InvalidArgumentError: If comparator is None or not callable.
        """
        if comparator is None:
            raise InvalidArgumentError("AVLTree(): comparator must not be None")
        if not callable(comparator):
            raise InvalidArgumentError(
                f"AVLTree(): comparator must be callable, got {type(comparator).__name__}"
            )
        self.root: Optional[AVLNode] = None
        self.comparator = comparator
        self._length = 0
        logger.debug(f"Created {type(self).__name__} with comparator {comparator!r}")

    def __str__(self):
        return "Empty AVLTree" if self.is_empty() else f"AVLTree(size={self._length}, root={self.root})"

    __repr__ = __str__

    # Public API
    @track_performance(tag="AVLTree.add")
    def add(self, value: E) -> bool:
        """
        Public method (O(log n)): Add a value if it is not already present.

        Args:
            value: The element to be added.
        Returns:
            bool: True if the value was inserted, False if already present.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("add(): value must not be None")
        prev_length = self._length
        self.root = self._insert(self.root, value)
        return self._length > prev_length

    @track_performance(tag="AVLTree.remove")
    def remove(self, value: E) -> bool:
        """
        Public method (O(log n)): Remove a value if it is present.

        Args:
            value: The element to be removed.
        Returns:
            bool: True if a node was removed.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("remove(): value must not be None")
        prev_length = self._length
        self.root = self._delete(self.root, value)
        return self._length < prev_length

    @track_performance(tag="AVLTree.contains")
    def contains(self, value: E) -> bool:
        """
        Iteratively descends from the root (O(log n)) comparing value
        against each visited node.

        Raises:
            InvalidArgumentError: If value is None.
        """
        if value is None:
            raise InvalidArgumentError("contains(): value must not be None")
        compare = self.comparator
        cur = self.root
        while cur is not None:
            cmp = compare(cur.value, value)
            if cmp == 0:
                return True
            cur = cur.left if cmp > 0 else cur.right
        return False

    def first(self) -> E:
        if self.root is None:
            raise EmptyTreeError("first(): the set is empty")
        return self._find_min(self.root).value

    def last(self) -> E:
        if self.root is None:
            raise EmptyTreeError("last(): the set is empty")
        return self._find_max(self.root).value

    def size(self) -> int:
        return self._length

    def height(self) -> int:
        """Cached height of the whole tree, 0 when empty."""
        return _height(self.root)

    def clear(self) -> None:
        logger.debug(f"Clearing {self._length} elements")
        self.root = None
        self._length = 0

    def check_balance(self) -> int:
        return self._check_balanced(self.root)

    # Performance tracking
    @classmethod
    def enable_performance_tracking(cls) -> None:
        PerformanceTracker.get_instance().enable()

    @classmethod
    def disable_performance_tracking(cls) -> None:
        PerformanceTracker.get_instance().disable()

    @classmethod
    def reset_performance_metrics(cls) -> None:
        PerformanceTracker.get_instance().reset()

    @classmethod
    def get_performance_report(cls, sort_by: str = 'total_time') -> str:
        return PerformanceTracker.get_instance().report(sort_by)

    # Private Methods
    def _insert(self, node: Optional[AVLNode], value: E) -> AVLNode:
        """Insert value below node and return the rebalanced subtree root."""
        if node is None:
            self._length += 1
            return AVLNode(value)

        cmp = self.comparator(node.value, value)
        if cmp > 0:
            node.left = self._insert(node.left, value)
        elif cmp < 0:
            node.right = self._insert(node.right, value)
        else:
            return node
        return _rebalance(node)

    def _delete(self, node: Optional[AVLNode], value: E) -> Optional[AVLNode]:
        """
        Delete value below node and return the rebalanced subtree root.

        A node with two children is replaced by its in-order successor: the
        successor is detached from the right subtree, takes over both of the
        removed node's subtrees and is rebalanced before being handed back to
        the parent.
        """
        if node is None:
            return None

        cmp = self.comparator(node.value, value)
        if cmp == 0:
            self._length -= 1
            left, right = node.left, node.right
            node.left = node.right = None
            if right is None:
                return left
            successor = self._find_min(right)
            successor.right = self._delete_min(right)
            successor.left = left
            return _rebalance(successor)

        if cmp < 0:
            node.right = self._delete(node.right, value)
        else:
            node.left = self._delete(node.left, value)
        return _rebalance(node)

    def _delete_min(self, node: AVLNode) -> Optional[AVLNode]:
        """Detach the leftmost node below node, rebalancing the path to it."""
        if node.left is None:
            return node.right
        node.left = self._delete_min(node.left)
        return _rebalance(node)

    @staticmethod
    def _find_min(node: AVLNode) -> AVLNode:
        while node.left is not None:
            node = node.left
        return node

    @staticmethod
    def _find_max(node: AVLNode) -> AVLNode:
        while node.right is not None:
            node = node.right
        return node

    def _check_balanced(self, node: Optional[AVLNode]) -> int:
        """Recompute subtree heights bottom-up, ignoring cached values."""
        if node is None:
            return 0
        left_height = self._check_balanced(node.left)
        right_height = self._check_balanced(node.right)
        if abs(left_height - right_height) > 1:
            logger.error(
                f"Unbalanced node {node}: left height={left_height}, "
                f"right height={right_height}"
            )
            raise UnbalancedTreeError(BALANCE_MESSAGE, left_height, right_height, str(node))
        return max(left_height, right_height) + 1

    def print_structure(self, indent: int = 0, max_depth: Optional[int] = None) -> str:
        """
        Render the tree sideways, one node per line with its cached height.
        Subtrees deeper than max_depth are elided.
        """
        prefix = ' ' * indent
        if self.is_empty():
            return f"{prefix}Empty {self.__class__.__name__}"

        result = [f"{prefix}{self.__class__.__name__}(size={self._length}, height={self.height()})"]

        def _render(node: Optional[AVLNode], label: str, depth: int) -> None:
            pad = prefix + '    ' * (depth + 1)
            if node is None:
                result.append(f"{pad}{label}: Empty")
                return
            if max_depth is not None and depth > max_depth:
                result.append(f"{pad}{label}: ... (max depth reached)")
                return
            result.append(f"{pad}{label}: {node}")
            if node.left is not None or node.right is not None:
                _render(node.left, "Left", depth + 1)
                _render(node.right, "Right", depth + 1)

        _render(self.root, "Root", 0)
        return "\n".join(result)


@dataclass
class Stats:
    height: int
    node_count: int
    max_imbalance: int
    least_item: Optional[Any]
    greatest_item: Optional[Any]
    is_search_tree: bool
    is_balanced: bool
    heights_consistent: bool


def _node_stats(node: Optional[AVLNode], compare: Comparator) -> Stats:
    if node is None:
        return Stats(height             = 0,
                     node_count         = 0,
                     max_imbalance      = 0,
                     least_item         = None,
                     greatest_item      = None,
                     is_search_tree     = True,
                     is_balanced        = True,
                     heights_consistent = True)

    left = _node_stats(node.left, compare)
    right = _node_stats(node.right, compare)

    imbalance = abs(left.height - right.height)
    height = 1 + max(left.height, right.height)

    is_search_tree = left.is_search_tree and right.is_search_tree
    if left.greatest_item is not None and compare(left.greatest_item, node.value) >= 0:
        is_search_tree = False
    if right.least_item is not None and compare(right.least_item, node.value) <= 0:
        is_search_tree = False

    return Stats(
        height=height,
        node_count=1 + left.node_count + right.node_count,
        max_imbalance=max(imbalance, left.max_imbalance, right.max_imbalance),
        least_item=left.least_item if node.left is not None else node.value,
        greatest_item=right.greatest_item if node.right is not None else node.value,
        is_search_tree=is_search_tree,
        is_balanced=imbalance <= 1 and left.is_balanced and right.is_balanced,
        heights_consistent=(
            node.height == height
            and left.heights_consistent
            and right.heights_consistent
        ),
    )


def avl_tree_stats_(t: AVLTree) -> Stats:
    """
    Returns aggregated statistics for an AVL tree in **O(n)** time.

    Unlike check_balance(), this never raises: every invariant is reported
    as a flag so that broken trees can be inspected.
    """
    return _node_stats(t.root, t.comparator)


def collect_keys(tree: AVLTree) -> List[Any]:
    """Return the tree's values in in-order sequence."""
    out = []
    stack = []
    cur = tree.root
    while stack or cur is not None:
        while cur is not None:
            stack.append(cur)
            cur = cur.left
        cur = stack.pop()
        out.append(cur.value)
        cur = cur.right
    return out
