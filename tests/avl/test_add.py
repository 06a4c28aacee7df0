"""Tests for AVLTree add method"""
# pylint: skip-file

import unittest
import logging

from avl_trees.base import InvalidArgumentError
from avl_trees.avl_tree import AVLTree
from tests.avl.base import TreeTestCase

logger = logging.getLogger(__name__)


class TestAddEmptyTree(TreeTestCase):
    """Test adding into an empty tree"""
    def test_add_single_value(self):
        self.assertTrue(self.tree.add(10))
        self._assert_node(self.tree.root, 10, 1)
        self.expected_keys = [10]
        self.expected_size = 1
        self.expected_height = 1

    def test_add_none_raises(self):
        with self.assertRaises(InvalidArgumentError):
            self.tree.add(None)
        self.assertTrue(self.tree.is_empty())
        self.assertIsNone(self.tree.root)

    def test_invalid_argument_is_type_error(self):
        with self.assertRaises(TypeError):
            self.tree.add(None)


class TestAddDuplicates(TreeTestCase):
    """Test that the set never stores duplicates"""
    def setUp(self):
        super().setUp()
        self._add_all([5, 3, 8])

    def test_add_existing_returns_false(self):
        self.assertFalse(self.tree.add(3))
        self.expected_size = 3
        self.expected_keys = [3, 5, 8]

    def test_add_twice_keeps_size(self):
        self.assertTrue(self.tree.add(4))
        self.assertFalse(self.tree.add(4))
        self.expected_size = 4
        self.expected_keys = [3, 4, 5, 8]

    def test_add_existing_keeps_structure(self):
        root = self.tree.root
        before = self.tree.print_structure()
        self.assertFalse(self.tree.add(8))
        self.assertIs(self.tree.root, root)
        self.assertEqual(self.tree.print_structure(), before)

    def test_add_none_leaves_set_unmodified(self):
        before = self.tree.print_structure()
        with self.assertRaises(InvalidArgumentError):
            self.tree.add(None)
        self.assertEqual(self.tree.print_structure(), before)
        self.expected_size = 3


class TestAddRotations(TreeTestCase):
    """Test the rotations triggered by insertion"""
    def test_single_left_rotation(self):
        self._add_all([1, 2, 3])
        self._assert_node(self.tree.root, 2, 2, left=1, right=3)
        self.expected_keys = [1, 2, 3]

    def test_single_right_rotation(self):
        self._add_all([3, 2, 1])
        self._assert_node(self.tree.root, 2, 2, left=1, right=3)
        self.expected_keys = [1, 2, 3]

    def test_left_right_rotation(self):
        self._add_all([3, 1, 2])
        self._assert_node(self.tree.root, 2, 2, left=1, right=3)
        self._assert_node(self.tree.root.left, 1, 1)
        self._assert_node(self.tree.root.right, 3, 1)

    def test_right_left_rotation(self):
        self._add_all([1, 3, 2])
        self._assert_node(self.tree.root, 2, 2, left=1, right=3)
        self._assert_node(self.tree.root.left, 1, 1)
        self._assert_node(self.tree.root.right, 3, 1)

    def test_rotation_below_root(self):
        # 4 and 5 hang below 3, forcing a rotation at 3 rather than the root
        self._add_all([2, 1, 3, 4, 5])
        self._assert_node(self.tree.root, 2, 3, left=1, right=4)
        self._assert_node(self.tree.root.right, 4, 2, left=3, right=5)
        self.expected_keys = [1, 2, 3, 4, 5]

    def test_ascending_one_to_seven_is_perfect(self):
        results = self._add_all(range(1, 8))
        self.assertTrue(all(results))
        self._assert_node(self.tree.root, 4, 3, left=2, right=6)
        self._assert_node(self.tree.root.left, 2, 2, left=1, right=3)
        self._assert_node(self.tree.root.right, 6, 2, left=5, right=7)
        self.assertEqual(self.tree.size(), 7)
        self.assertEqual(self.tree.first(), 1)
        self.assertEqual(self.tree.last(), 7)
        self.assertTrue(self.tree.contains(4))
        self.assertFalse(self.tree.contains(8))
        self.expected_keys = list(range(1, 8))
        self.expected_height = 3

    def test_rotation_logged_at_debug(self):
        with self.assertLogs("avl_trees.avl_tree", level="DEBUG") as cm:
            self._add_all([1, 2, 3])
        self.assertTrue(
            any("Single left rotation at AVLNode(value=1, height=3)" in line
                for line in cm.output),
            f"rotation not logged: {cm.output}"
        )

    def test_descending_insertions(self):
        self._add_all(range(15, 0, -1))
        self.expected_keys = list(range(1, 16))
        self.expected_height = 4


class TestAddOrdering(TreeTestCase):
    """Test element types and comparators"""
    def test_add_strings(self):
        self._add_all(["pear", "apple", "fig", "banana"])
        self.assertEqual(self.tree.first(), "apple")
        self.assertEqual(self.tree.last(), "pear")
        self.expected_keys = ["apple", "banana", "fig", "pear"]

    def test_add_tuples(self):
        self._add_all([(1, "b"), (1, "a"), (0, "z")])
        self.expected_keys = [(0, "z"), (1, "a"), (1, "b")]

    def test_reverse_comparator(self):
        self.tree = AVLTree(lambda a, b: (b > a) - (b < a))
        self._add_all(range(1, 6))
        self.assertEqual(self.tree.first(), 5)
        self.assertEqual(self.tree.last(), 1)
        self.expected_keys = [5, 4, 3, 2, 1]

    def test_comparator_defines_equality(self):
        def casefold_compare(a, b):
            a, b = a.casefold(), b.casefold()
            return (a > b) - (a < b)

        self.tree = AVLTree(casefold_compare)
        self.assertTrue(self.tree.add("Alpha"))
        self.assertFalse(self.tree.add("ALPHA"))
        self.assertTrue(self.tree.contains("alpha"))
        self.expected_keys = ["Alpha"]

    def test_incomparable_value_leaves_tree_unmodified(self):
        self._add_all([2, 1, 3])
        before = self.tree.print_structure()
        with self.assertRaises(TypeError):
            self.tree.add("two")
        self.assertEqual(self.tree.print_structure(), before)
        self.expected_size = 3


class TestConstruction(unittest.TestCase):
    """Test comparator validation"""
    def test_none_comparator_raises(self):
        with self.assertRaises(InvalidArgumentError):
            AVLTree(None)

    def test_non_callable_comparator_raises(self):
        with self.assertRaises(InvalidArgumentError):
            AVLTree(comparator=42)

    def test_default_comparator_is_natural_order(self):
        tree = AVLTree()
        self.assertTrue(tree.is_empty())
        self.assertEqual(tree.size(), 0)
        self.assertEqual(str(tree), "Empty AVLTree")


if __name__ == "__main__":
    unittest.main()
