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

"""Abstract sorted-set interfaces, errors and comparators"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

E = TypeVar("E")

Comparator = Callable[[Any, Any], int]


class AVLTreeError(Exception):
    """Base class for all errors raised by sorted set data structures."""


class InvalidArgumentError(AVLTreeError, TypeError):
    """Raised when None is passed where a value or comparator is required."""


class EmptyTreeError(AVLTreeError, LookupError):
    """Raised when the minimum or maximum of an empty set is requested."""


class UnbalancedTreeError(AVLTreeError):
    """
    Raised by a balance check when two sibling subtrees differ in height
    by more than one.

    Attributes:
        left_height (int): Height of the offending node's left subtree.
        right_height (int): Height of the offending node's right subtree.
        node (str): Description of the offending node.
    """

    def __init__(self, message: str, left_height: int, right_height: int, node: str):
        super().__init__(
            f"{message}: left height={left_height}, "
            f"right height={right_height}, node={node}"
        )
        self.left_height = left_height
        self.right_height = right_height
        self.node = node


def natural_order(a: Any, b: Any) -> int:
    """Three-way comparison using the elements' own ordering."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


class AbstractSortedSet(ABC, Generic[E]):
    """
    Abstract base class for a set keeping its elements in comparator order.
    """

    @abstractmethod
    def add(self, value: E) -> bool:
        """
        Add the value to the set if it is not already present.

        Parameters:
            value (E): The element to be added.

        Returns:
            bool: True if the set did not already contain the value.
        """
        pass

    @abstractmethod
    def remove(self, value: E) -> bool:
        """
        Remove the value from the set if it is present.

        Parameters:
            value (E): The element to be removed.

        Returns:
            bool: True if the set contained the value.
        """
        pass

    @abstractmethod
    def contains(self, value: E) -> bool:
        """Return True if the set contains an element equal to value."""
        pass

    @abstractmethod
    def first(self) -> E:
        """Return the lowest element. Raises EmptyTreeError if empty."""
        pass

    @abstractmethod
    def last(self) -> E:
        """Return the highest element. Raises EmptyTreeError if empty."""
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    def is_empty(self) -> bool:
        return self.size() == 0

    @abstractmethod
    def clear(self) -> None:
        pass

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, value: E) -> bool:
        return self.contains(value)


class AbstractSelfBalancingSortedSet(AbstractSortedSet[E]):
    """
    A sorted set backed by a self-balancing search tree.
    """

    @abstractmethod
    def check_balance(self) -> int:
        """
        Walk the whole tree and verify that the two subtrees of every node
        differ in height by at most one.

        Returns:
            int: The height of the tree.

        Raises:
            UnbalancedTreeError: At the first node violating the balance.
        """
        pass
