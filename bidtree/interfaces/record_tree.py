"""
RecordTree abstract base class for keyed record trees.
"""

from abc import abstractmethod

from bidtree.interfaces.traversable import Traversable
from bidtree.models.record import Record


class RecordTree(Traversable):
    """
    Abstract base class for trees storing records keyed by record.key.

    Provides insert, exact-key search and delete.
    Inherits traversal capabilities from Traversable.

    Implementations:
    - BinarySearchTree: Unbalanced, shape depends on insertion order
    """

    @abstractmethod
    def insert(self, record: Record) -> None:
        """
        Insert a record as a new node.

        Duplicate keys are accepted and stored to the right of existing
        equal keys.

        Args:
            record: The record to insert.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def search(self, key: str) -> Record | None:
        """
        Find the record stored under key.

        Args:
            key: The key to look up.

        Returns:
            The record if found, None otherwise.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove one record stored under key.

        Args:
            key: The key to remove.

        Returns:
            True if a record was removed, False if the key was absent.

        Time complexity: O(height)
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of records held.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Release every node, leaving an empty tree."""
        pass

    def has(self, key: str) -> bool:
        return self.search(key) is not None

    def is_empty(self) -> bool:
        return self.size() == 0

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        return self.size()
