"""
In-memory keyed record store built on an unbalanced binary search tree.

This package provides:
- insert(record) - O(height), duplicates go right
- search(key) - O(height), None when absent
- delete(key) - O(height), successor promotion for two-child nodes
- in-order, pre-order and post-order traversal into a sink
- quick_sort / selection_sort over record sequences by title
"""

from bidtree.engine.store import RecordStore
from bidtree.interfaces import TraversalOrder
from bidtree.models import Record
from bidtree.models.trees import BinarySearchTree
from bidtree.sorting import quick_sort, selection_sort

__all__ = [
    "BinarySearchTree",
    "Record",
    "RecordStore",
    "TraversalOrder",
    "quick_sort",
    "selection_sort",
]
