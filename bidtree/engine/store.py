"""
RecordStore - Main record store API.
"""

import logging
import time
from collections.abc import Callable, Iterable
from os import PathLike

from bidtree.ingest.csv_loader import DEFAULT_COLUMNS, ColumnMap, iter_records
from bidtree.interfaces.record_tree import RecordTree
from bidtree.interfaces.traversable import TraversalOrder
from bidtree.models.record import Record
from bidtree.models.trees import BinarySearchTree
from bidtree.sorting import SORTERS

logger = logging.getLogger(__name__)


class RecordStore:
    """
    In-memory record store.

    Provides:
    - load_csv(path): Replace the contents with the records of a CSV export
    - read_csv(path) / replace(records): The two halves of load_csv
    - insert(record): Add a record
    - find(key): Retrieve a record by key
    - remove(key): Remove a record by key
    - records(order): List records in a traversal order
    - sort(algorithm): Sort the loaded sequence by title

    Architecture:
    - Records live in two independent containers: a keyed tree for lookups
      and ordered traversal, and a flat sequence in load order for sorting
    - find/remove/records only touch the tree; sort only touches the sequence
    """

    def __init__(
        self,
        tree_factory: Callable[[], RecordTree] = BinarySearchTree,
        amount_strip: str = "$",
        columns: ColumnMap = DEFAULT_COLUMNS,
        encoding: str = "utf-8-sig",
    ) -> None:
        """
        Initialize an empty store.

        Args:
            tree_factory: Builds the tree backing key lookups.
            amount_strip: Characters removed from CSV amount cells.
            columns: Column positions of the CSV export.
            encoding: Text encoding of CSV exports.
        """
        if not amount_strip:
            raise ValueError("amount_strip cannot be empty")

        self._tree_factory = tree_factory
        self._amount_strip = amount_strip
        self._columns = columns
        self._encoding = encoding

        self._tree: RecordTree = tree_factory()
        self._sequence: list[Record] = []

    @property
    def tree(self) -> RecordTree:
        return self._tree

    def read_csv(self, csv_path: str | PathLike[str]) -> list[Record]:
        """
        Read the records in csv_path without touching the store.

        Safe to call from a worker thread.

        Raises:
            RecordLoadError: If the file cannot be read.
        """
        return list(
            iter_records(csv_path, self._columns, self._amount_strip, self._encoding)
        )

    def replace(self, records: Iterable[Record]) -> int:
        """
        Replace the store's contents with records, inserted in the given order.

        Returns:
            Number of records now held.
        """
        tree = self._tree_factory()
        sequence: list[Record] = []
        for record in records:
            tree.insert(record)
            sequence.append(record)

        self._tree.clear()
        self._tree = tree
        self._sequence = sequence
        return len(sequence)

    def load_csv(self, csv_path: str | PathLike[str]) -> int:
        """
        Replace the store's contents with the records in csv_path.

        Records are inserted in file order. The previous tree is released
        only once the whole file has been read.

        Returns:
            Number of records read.

        Raises:
            RecordLoadError: If the file cannot be read.
        """
        start_time = time.perf_counter()
        count = self.replace(self.read_csv(csv_path))
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"Loaded {count} records from {csv_path} in {elapsed_ms:.2f}ms")
        return count

    def insert(self, record: Record) -> None:
        self._tree.insert(record)
        self._sequence.append(record)

    def find(self, key: str) -> Record | None:
        """
        Retrieve a record by key.

        Returns:
            The record if found, None otherwise.
        """
        start_time = time.perf_counter()
        record = self._tree.search(key)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"find {key} -> {'hit' if record else 'miss'} in {elapsed_ms:.3f}ms")
        return record

    def remove(self, key: str) -> bool:
        """
        Remove a record from the tree.

        The loaded sequence is left untouched.

        Returns:
            True if a record was removed, False if the key was absent.
        """
        removed = self._tree.delete(key)
        logger.debug(f"remove {key} -> {removed}")
        return removed

    def records(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> list[Record]:
        """Collect every record held by the tree in the given order."""
        result: list[Record] = []
        self._tree.traverse(order, result.append)
        return result

    def sort(self, algorithm: str = "quick") -> int:
        """
        Sort the loaded sequence in place by title.

        Args:
            algorithm: "quick" or "selection".

        Returns:
            Number of records sorted.

        Raises:
            ValueError: If the algorithm is unknown.
        """
        sorter = SORTERS.get(algorithm)
        if sorter is None:
            raise ValueError(
                f"Unknown sort algorithm {algorithm!r}, expected one of {sorted(SORTERS)}"
            )

        start_time = time.perf_counter()
        sorter(self._sequence)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"{algorithm} sort of {len(self._sequence)} records in {elapsed_ms:.2f}ms")
        return len(self._sequence)

    def sequence(self) -> list[Record]:
        """Return a copy of the loaded sequence in its current order."""
        return list(self._sequence)

    def size(self) -> int:
        return self._tree.size()
