"""Abstract bulk-write store — one request per batch, reports consumed capacity."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from zabbix_watch.store.exceptions import StoreBatchTooLargeError

Item = dict[str, Any]


class BulkWriteStore(abc.ABC):
    """Base class for capacity-limited bulk-write backends.

    Subclasses implement ``_write()`` for a single, already size-checked
    batch. ``write()`` enforces ``max_batch_size`` and skips empty batches.
    """

    max_batch_size: int = 25

    async def write(self, table: str, items: Sequence[Item]) -> float:
        """Write one batch to *table* and return the consumed capacity units."""
        if len(items) > self.max_batch_size:
            raise StoreBatchTooLargeError(
                f"Batch of {len(items)} exceeds limit of {self.max_batch_size}"
            )
        if not items:
            return 0.0
        return await self._write(table, items)

    @abc.abstractmethod
    async def _write(self, table: str, items: Sequence[Item]) -> float:
        """Issue a single bulk-write request."""

    async def connect(self) -> None:
        """Acquire backend resources. No-op by default."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""

    async def __aenter__(self) -> BulkWriteStore:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
