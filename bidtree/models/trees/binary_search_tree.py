"""
Unbalanced Binary Search Tree implementation for keyed record storage.

Tree shape depends entirely on insertion order: random input gives
O(log N) expected height, sorted input degrades to an O(N) chain. Every
operation walks the tree iteratively so a degenerate chain never hits
the interpreter's recursion limit.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from bidtree.interfaces.record_tree import RecordTree
from bidtree.interfaces.traversable import TraversalOrder
from bidtree.models.exceptions import TreeInvariantError
from bidtree.models.record import Record


@dataclass(eq=False)
class Node:
    """Node in the Binary Search Tree. Owns its record and both children."""

    record: Record
    left: "Node | None" = None
    right: "Node | None" = None

    @property
    def key(self) -> str:
        return self.record.key


class BinarySearchTree(RecordTree):
    """
    Binary Search Tree implementation of RecordTree.

    Properties maintained:
    1. Keys in a node's left subtree are strictly less than the node's key
    2. Keys in a node's right subtree are greater than or equal to it
    3. Each node has exactly one owner (its parent, or the tree for the root)
    """

    def __init__(self) -> None:
        self._root: Node | None = None
        self._size: int = 0

    @property
    def root(self) -> Record | None:
        """Record held by the root node, None for an empty tree."""
        return self._root.record if self._root else None

    def insert(self, record: Record) -> None:
        """Insert a record as a new leaf. O(height)"""
        new_node = Node(record=record)
        if self._root is None:
            self._root = new_node
            self._size = 1
            return

        current = self._root
        while True:
            if record.key < current.key:
                if current.left is None:
                    current.left = new_node
                    break
                current = current.left
            else:
                # Equal keys go right
                if current.right is None:
                    current.right = new_node
                    break
                current = current.right

        self._size += 1

    def search(self, key: str) -> Record | None:
        """Retrieve a record by key. O(height)"""
        node = self._find_node(key)
        return node.record if node else None

    def delete(self, key: str) -> bool:
        """Remove the first record found under key. O(height)"""
        parent = None
        current = self._root

        while current is not None and key != current.key:
            parent = current
            current = current.left if key < current.key else current.right

        if current is None:
            return False

        replacement = self._remove_node(current)
        if parent is None:
            self._root = replacement
        elif parent.left is current:
            parent.left = replacement
        else:
            parent.right = replacement

        self._size -= 1
        return True

    def size(self) -> int:
        return self._size

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path. O(N)"""
        height = 0
        level = [self._root] if self._root else []
        while level:
            height += 1
            level = [
                child
                for node in level
                for child in (node.left, node.right)
                if child is not None
            ]
        return height

    def clear(self) -> None:
        """Unlink every node, children before parents."""
        stack = [self._root] if self._root else []
        while stack:
            node = stack.pop()
            if node.left:
                stack.append(node.left)
            if node.right:
                stack.append(node.right)
            node.left = None
            node.right = None

        self._root = None
        self._size = 0

    def validate(self) -> None:
        """
        Check the ordering invariant and the node count.

        Raises:
            TreeInvariantError: On the first violation found.
        """
        count = 0
        # (node, inclusive lower bound, exclusive upper bound)
        stack: list[tuple[Node, str | None, str | None]] = []
        if self._root:
            stack.append((self._root, None, None))

        while stack:
            node, low, high = stack.pop()
            count += 1
            if low is not None and node.key < low:
                raise TreeInvariantError(node.key, f"key sorts before ancestor {low!r}")
            if high is not None and node.key >= high:
                raise TreeInvariantError(node.key, f"key does not sort before ancestor {high!r}")
            if node.left:
                stack.append((node.left, low, node.key))
            if node.right:
                stack.append((node.right, node.key, high))

        if count != self._size:
            raise TreeInvariantError(
                None, f"size is {self._size} but {count} nodes are reachable"
            )

    def iter_records(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Record]:
        if order == TraversalOrder.IN_ORDER:
            return _InOrderIterator(self._root)
        if order == TraversalOrder.PRE_ORDER:
            return _PreOrderIterator(self._root)
        if order == TraversalOrder.POST_ORDER:
            return _PostOrderIterator(self._root)
        raise ValueError(f"Unsupported traversal order: {order!r}")

    def _find_node(self, key: str) -> Node | None:
        """Find the first node on the descent path holding key."""
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _remove_node(self, node: Node) -> Node | None:
        """
        Detach node's record and return the subtree that takes its place.

        The caller owns writing the returned subtree into the parent link.
        """
        if node.left is None and node.right is None:
            return None
        if node.right is None:
            return node.left
        if node.left is None:
            return node.right

        # Two children: promote the in-order successor's record
        successor_parent = node
        successor = node.right
        while successor.left is not None:
            successor_parent = successor
            successor = successor.left

        node.record = successor.record

        # Successor has no left child, so this is the leaf or right-only case
        if successor_parent is node:
            node.right = self._remove_node(successor)
        else:
            successor_parent.left = self._remove_node(successor)

        return node


class _NodeIterator(Iterator[Record]):
    """Base for stack-driven traversals. Mutating the tree mid-walk is undefined."""

    def __init__(self) -> None:
        self._stack: list[Node] = []

    def __iter__(self) -> Iterator[Record]:
        return self


class _InOrderIterator(_NodeIterator):
    """Left, self, right. Yields records in ascending key order."""

    def __init__(self, root: Node | None) -> None:
        super().__init__()
        self._push_left_path(root)

    def __next__(self) -> Record:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        # Push right subtree's left path
        self._push_left_path(node.right)

        return node.record

    def _push_left_path(self, node: Node | None) -> None:
        while node:
            self._stack.append(node)
            node = node.left


class _PreOrderIterator(_NodeIterator):
    """Self, left, right."""

    def __init__(self, root: Node | None) -> None:
        super().__init__()
        if root:
            self._stack.append(root)

    def __next__(self) -> Record:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()
        if node.right:
            self._stack.append(node.right)
        if node.left:
            self._stack.append(node.left)

        return node.record


class _PostOrderIterator(_NodeIterator):
    """Left, right, self."""

    def __init__(self, root: Node | None) -> None:
        super().__init__()
        self._push_first_leaf_path(root)

    def __next__(self) -> Record:
        if not self._stack:
            raise StopIteration

        node = self._stack.pop()

        # Finished a left subtree: the parent's right subtree comes next
        if self._stack:
            parent = self._stack[-1]
            if parent.left is node and parent.right is not None:
                self._push_first_leaf_path(parent.right)

        return node.record

    def _push_first_leaf_path(self, node: Node | None) -> None:
        """Push the path to the first leaf reached preferring left children."""
        while node:
            self._stack.append(node)
            node = node.left if node.left else node.right
