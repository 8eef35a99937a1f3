"""
Custom exceptions for record trees and record ingestion.
"""


class TreeInvariantError(Exception):
    """
    Raised when a tree fails its ordering or bookkeeping checks.

    This is a fail-fast error indicating a corrupted tree.
    """

    def __init__(self, key: str | None, reason: str):
        """
        Initialize invariant error.

        Args:
            key: Key of the node where the violation was detected, if any.
            reason: Description of the violated invariant.
        """
        self.key = key
        self.reason = reason
        where = f" at key {key!r}" if key is not None else ""
        super().__init__(f"Tree invariant violated{where}: {reason}")


class RecordLoadError(Exception):
    """Raised when a record source cannot be read or parsed."""

    def __init__(self, path: str, reason: str, line: int | None = None):
        self.path = path
        self.reason = reason
        self.line = line
        location = f"{path}:{line}" if line is not None else path
        super().__init__(f"Failed to load records from {location}: {reason}")
