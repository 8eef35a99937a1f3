"""
Data models for the record store.
"""

from bidtree.models.exceptions import RecordLoadError, TreeInvariantError
from bidtree.models.record import Record

__all__ = [
    "Record",
    "RecordLoadError",
    "TreeInvariantError",
]
