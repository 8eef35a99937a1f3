"""
Load records from the monthly auction-sales CSV export.

The export has a header row followed by one row per auction. Columns are
addressed by position, see ColumnMap for the defaults.
"""

import csv
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from bidtree.models.exceptions import RecordLoadError
from bidtree.models.record import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnMap:
    """Zero-based column positions of each record field."""

    title: int = 0
    key: int = 1
    amount: int = 4
    category: int = 8

    def __post_init__(self) -> None:
        for name in ("title", "key", "amount", "category"):
            if getattr(self, name) < 0:
                raise ValueError(f"Column index for {name} must be >= 0")

    @property
    def width(self) -> int:
        """Minimum number of cells a row needs."""
        return max(self.title, self.key, self.amount, self.category) + 1


DEFAULT_COLUMNS = ColumnMap()


def parse_amount(text: str | None, strip: str = "$") -> float:
    """
    Convert a currency string such as "$1,234.50" to a float.

    Every character in strip and any thousands separator is removed before
    conversion. Malformed or empty text converts to 0.0.
    """
    if text is None:
        return 0.0

    cleaned = text
    for ch in strip + ",":
        cleaned = cleaned.replace(ch, "")
    cleaned = cleaned.strip()

    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def iter_records(
    csv_path: str | PathLike[str],
    columns: ColumnMap = DEFAULT_COLUMNS,
    amount_strip: str = "$",
    encoding: str = "utf-8-sig",
) -> Iterator[Record]:
    """
    Yield one Record per data row, in file order.

    Args:
        csv_path: Path of the CSV file.
        columns: Positions of the record fields.
        amount_strip: Characters removed from the amount cell before parsing.
        encoding: Text encoding of the file.

    Raises:
        RecordLoadError: If the file cannot be opened, decoded or parsed as CSV.
    """
    path = Path(csv_path)
    try:
        f = path.open(encoding=encoding, newline="")
    except OSError as e:
        raise RecordLoadError(str(path), e.strerror or str(e)) from e
    except LookupError as e:
        raise RecordLoadError(str(path), f"unknown encoding {encoding!r}") from e

    with f:
        reader = csv.reader(f)
        try:
            header = next(reader, None)
            if header is None:
                return

            for row in reader:
                if not row:
                    continue
                if len(row) < columns.width:
                    logger.warning(
                        f"Skipping row {reader.line_num} of {path}: "
                        f"expected {columns.width} columns, got {len(row)}"
                    )
                    continue

                yield Record(
                    key=row[columns.key].strip(),
                    title=row[columns.title].strip(),
                    category=row[columns.category].strip(),
                    amount=parse_amount(row[columns.amount], amount_strip),
                )
        except csv.Error as e:
            raise RecordLoadError(str(path), str(e), line=reader.line_num) from e
        except UnicodeDecodeError as e:
            # Decoding runs ahead of the reader in chunks, so no line number
            raise RecordLoadError(str(path), f"not valid {encoding}: {e.reason}") from e


def load_records(
    csv_path: str | PathLike[str],
    columns: ColumnMap = DEFAULT_COLUMNS,
    amount_strip: str = "$",
    encoding: str = "utf-8-sig",
) -> list[Record]:
    """Read every record from csv_path into a list."""
    records = list(iter_records(csv_path, columns, amount_strip, encoding))
    logger.info(f"Loaded {len(records)} records from {csv_path}")
    return records
