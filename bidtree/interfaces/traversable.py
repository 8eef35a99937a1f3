"""
Traversable protocol for tree structures that visit every stored record.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from enum import IntEnum

from bidtree.models.record import Record


class TraversalOrder(IntEnum):
    """Order in which a tree visits its nodes."""

    IN_ORDER = 0  # left, self, right
    PRE_ORDER = 1  # self, left, right
    POST_ORDER = 2  # left, right, self

    @classmethod
    def parse(cls, name: str) -> "TraversalOrder":
        """
        Resolve a short order name such as "in", "pre" or "post".

        Raises:
            ValueError: If the name does not match any order.
        """
        normalized = str(name).strip().lower().replace("-", "_")
        aliases = {
            "in": cls.IN_ORDER,
            "in_order": cls.IN_ORDER,
            "inorder": cls.IN_ORDER,
            "pre": cls.PRE_ORDER,
            "pre_order": cls.PRE_ORDER,
            "preorder": cls.PRE_ORDER,
            "post": cls.POST_ORDER,
            "post_order": cls.POST_ORDER,
            "postorder": cls.POST_ORDER,
        }
        if normalized not in aliases:
            raise ValueError(f"Unknown traversal order: {name!r}")
        return aliases[normalized]


Sink = Callable[[Record], object]


class Traversable(ABC):
    """
    Protocol for data structures that can visit every record they hold.

    Implementations must support:
    - Sink-based traversal in any TraversalOrder via traverse(order, sink)
    - Lazy iteration in any TraversalOrder via iter_records(order)
    - Plain iteration (in-order) via __iter__
    """

    @abstractmethod
    def iter_records(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Record]:
        """
        Return an iterator visiting every record exactly once.

        Args:
            order: The traversal order to visit nodes in.

        Returns:
            Iterator yielding records in the requested order.
        """
        pass

    def traverse(self, order: TraversalOrder, sink: Sink) -> None:
        """
        Visit every record in the given order, passing each to sink.

        Args:
            order: The traversal order to visit nodes in.
            sink: Callable invoked once per record.
        """
        for record in self.iter_records(order):
            sink(record)

    def in_order(self, sink: Sink) -> None:
        self.traverse(TraversalOrder.IN_ORDER, sink)

    def pre_order(self, sink: Sink) -> None:
        self.traverse(TraversalOrder.PRE_ORDER, sink)

    def post_order(self, sink: Sink) -> None:
        self.traverse(TraversalOrder.POST_ORDER, sink)

    def __iter__(self) -> Iterator[Record]:
        """Return an iterator over all records in ascending key order."""
        return self.iter_records(TraversalOrder.IN_ORDER)
