"""
Builders shared by the test modules.
"""

from bidtree.models import Record
from bidtree.models.trees import BinarySearchTree

CSV_HEADER = (
    "ArticleTitle,ArticleID,Department,CloseDate,WinningBid,"
    "InventoryID,VehicleID,ReceiptNumber,Fund"
)


def make_record(key: str, title: str | None = None, amount: float = 0.0) -> Record:
    """Build a record whose title defaults to a value derived from its key."""
    return Record(key=key, title=title or f"title-{key}", category="General Fund", amount=amount)


def build_tree(keys: list[str]) -> BinarySearchTree:
    tree = BinarySearchTree()
    for key in keys:
        tree.insert(make_record(key))
    return tree


def collect_keys(tree: BinarySearchTree, visit) -> list[str]:
    """Run a sink-based traversal method and return the keys it visited."""
    keys = []
    visit(tree, lambda record: keys.append(record.key))
    return keys


def in_order_keys(tree: BinarySearchTree) -> list[str]:
    return collect_keys(tree, BinarySearchTree.in_order)
