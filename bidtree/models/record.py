"""
Record - the keyed value stored by trees and ordered by sorters.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Record:
    """
    An immutable auction record.

    Attributes:
        key: Unique identifier, used as the tree key.
        title: Human readable title, used as the sort key.
        category: Opaque payload (the fund the record belongs to).
        amount: Monetary amount, non-negative by convention.
    """

    key: str
    title: str = ""
    category: str = ""
    amount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the record's fields."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """
        Build a record from a mapping such as a decoded JSON body.

        Args:
            data: Mapping with a required "key" and optional "title",
                "category" and "amount" entries.

        Returns:
            The constructed Record.

        Raises:
            ValueError: If "key" is missing or empty, or "amount" is not numeric.
        """
        key = data.get("key")
        if not key:
            raise ValueError("Record requires a non-empty 'key'")

        amount = data.get("amount")
        try:
            amount = float(amount) if amount is not None else 0.0
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid amount for record {key}: {amount!r}") from e

        return cls(
            key=str(key),
            title=str(data.get("title") or ""),
            category=str(data.get("category") or ""),
            amount=amount,
        )

    def __str__(self) -> str:
        return f"{self.key}: {self.title} | {self.amount} | {self.category}"
