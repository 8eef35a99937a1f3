"""
Record tree implementations.
"""

from bidtree.models.trees.binary_search_tree import BinarySearchTree

__all__ = ["BinarySearchTree"]
