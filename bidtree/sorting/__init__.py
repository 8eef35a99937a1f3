"""
Sequence sorting algorithms.
"""

from bidtree.sorting.sorters import SORTERS, partition, quick_sort, selection_sort

__all__ = ["SORTERS", "partition", "quick_sort", "selection_sort"]
