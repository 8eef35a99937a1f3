"""
Abstract base classes and protocols for record trees.
"""

from bidtree.interfaces.record_tree import RecordTree
from bidtree.interfaces.traversable import Sink, Traversable, TraversalOrder

__all__ = ["RecordTree", "Sink", "Traversable", "TraversalOrder"]
