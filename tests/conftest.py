"""
Shared pytest fixtures for record store tests.
"""

import pytest

from bidtree.engine import RecordStore
from bidtree.models import Record
from bidtree.models.trees import BinarySearchTree
from helpers import CSV_HEADER, build_tree


@pytest.fixture
def tree():
    """Provide a fresh, empty BinarySearchTree."""
    return BinarySearchTree()


@pytest.fixture
def small_tree():
    """Tree built from 5, 3, 8, 1, 4, 7, 9."""
    return build_tree(["5", "3", "8", "1", "4", "7", "9"])


@pytest.fixture
def balanced_tree():
    """Complete tree of depth 3 rooted at 50."""
    return build_tree(["50", "30", "70", "20", "40", "60", "80"])


@pytest.fixture
def sample_records():
    """Provide sample records with unordered titles."""
    return [
        Record(key="98109", title="Chair", category="General Fund", amount=45.0),
        Record(key="98223", title="Antique Desk", category="Enterprise", amount=120.5),
        Record(key="97990", title="Bicycle", category="General Fund", amount=27.0),
        Record(key="98001", title="Lamp", category="Grant Funds", amount=8.25),
        Record(key="98150", title="Desk", category="Enterprise", amount=60.0),
    ]


@pytest.fixture
def bids_csv(tmp_path):
    """Write a small auction export and return its path."""
    rows = [
        CSV_HEADER,
        'Hoover Steam Vac,98109,Community Svc,11/6/2016,$27.00,IN-1,,R1,General Fund',
        'Table,97990,Enterprise,11/7/2016,"$1,225.50",IN-2,,R2,Enterprise',
        'Bicycle,98223,Police,11/8/2016,$15.00,IN-3,,R3,General Fund',
        'Antique Desk,98001,Parks,11/9/2016,n/a,IN-4,,R4,Grant Funds',
    ]
    path = tmp_path / "bids.csv"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def store(bids_csv):
    """Provide a RecordStore loaded from bids_csv."""
    store = RecordStore()
    store.load_csv(bids_csv)
    return store
