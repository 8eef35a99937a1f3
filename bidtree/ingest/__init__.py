"""
Record ingestion from external sources.
"""

from bidtree.ingest.csv_loader import (
    DEFAULT_COLUMNS,
    ColumnMap,
    iter_records,
    load_records,
    parse_amount,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "ColumnMap",
    "iter_records",
    "load_records",
    "parse_amount",
]
