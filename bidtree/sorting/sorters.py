"""
In-place sorts over mutable sequences of records, ordered by title.

Neither sort is stable; records with equal titles end up in whatever
order the swap pattern leaves them.
"""

from collections.abc import Callable, MutableSequence
from typing import Any

from bidtree.models.record import Record


def _title(record: Record) -> str:
    return record.title


def partition(
    records: MutableSequence[Any],
    begin: int,
    end: int,
    key: Callable[[Any], Any] = _title,
) -> int:
    """
    Hoare partition of records[begin..end] around the middle element.

    Args:
        records: Sequence to partition in place.
        begin: First index of the range (inclusive).
        end: Last index of the range (inclusive).
        key: Sort key extractor.

    Returns:
        Partition point p: every element of [begin, p] sorts no later than
        every element of [p + 1, end].
    """
    low = begin
    high = end
    pivot = key(records[begin + (end - begin) // 2])

    while True:
        while key(records[low]) < pivot:
            low += 1

        while pivot < key(records[high]):
            high -= 1

        if low >= high:
            return high

        records[low], records[high] = records[high], records[low]
        low += 1
        high -= 1


def quick_sort(
    records: MutableSequence[Any],
    begin: int = 0,
    end: int | None = None,
    key: Callable[[Any], Any] = _title,
) -> None:
    """
    Quick sort records[begin..end] in place.

    Average performance: O(N log N)
    Worst case performance: O(N^2)

    Args:
        records: Sequence to sort.
        begin: First index to sort (inclusive).
        end: Last index to sort (inclusive), defaults to the last element.
        key: Sort key extractor, defaults to the record title.
    """
    if end is None:
        end = len(records) - 1

    # Recurse into the smaller half, loop on the larger one
    while begin < end:
        mid = partition(records, begin, end, key)
        if mid - begin < end - mid:
            quick_sort(records, begin, mid, key)
            begin = mid + 1
        else:
            quick_sort(records, mid + 1, end, key)
            end = mid


def selection_sort(
    records: MutableSequence[Any],
    key: Callable[[Any], Any] = _title,
) -> None:
    """
    Selection sort records in place.

    Average performance: O(N^2)
    Worst case performance: O(N^2)
    """
    count = len(records)
    for i in range(count - 1):
        min_index = i
        for j in range(i + 1, count):
            if key(records[j]) < key(records[min_index]):
                min_index = j

        if min_index != i:
            records[i], records[min_index] = records[min_index], records[i]


SORTERS: dict[str, Callable[[MutableSequence[Any]], None]] = {
    "quick": quick_sort,
    "selection": selection_sort,
}
