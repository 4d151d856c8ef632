"""Exception hierarchy for bulk-write stores."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all store errors."""


class StoreWriteError(StoreError):
    """A bulk-write request to *table* failed."""

    def __init__(self, table: str, reason: str) -> None:
        self.table = table
        self.reason = reason
        super().__init__(f"Write to {table} failed: {reason}")


class StoreBatchTooLargeError(StoreError):
    """A batch exceeded the store's per-request item ceiling."""
