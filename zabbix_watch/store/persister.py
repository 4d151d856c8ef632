"""BatchPersister — splits record streams into store-sized batches."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TypeVar

import structlog

from zabbix_watch.core.types import Host, RunResult
from zabbix_watch.store.base import BulkWriteStore, Item

logger = structlog.stdlib.get_logger()

T = TypeVar("T")


def chunk(records: Sequence[T], size: int) -> list[list[T]]:
    """Split *records* into consecutive chunks of at most *size* items."""
    if size < 1:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(records[i:i + size]) for i in range(0, len(records), size)]


class BatchPersister:
    """Drives records through a BulkWriteStore in batches of ``batch_size``.

    All batches are issued concurrently and awaited jointly; the first
    failing batch propagates its StoreError. Batches already written are
    not rolled back.
    """

    def __init__(
        self,
        store: BulkWriteStore,
        hosts_table: str = "zabbix.hosts",
        events_table: str = "zabbix.events",
        batch_size: int | None = None,
    ) -> None:
        size = batch_size or store.max_batch_size
        if size > store.max_batch_size:
            raise ValueError(
                f"batch_size {size} exceeds store limit {store.max_batch_size}"
            )
        self._store = store
        self._hosts_table = hosts_table
        self._events_table = events_table
        self._batch_size = size

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def persist(self, table: str, records: Sequence[Item]) -> float:
        """Write *records* to *table*. Returns total consumed capacity."""
        _, capacity = await self._persist(table, records)
        return capacity

    async def persist_snapshot(self, hosts: dict[str, Host]) -> RunResult:
        """Detach events from *hosts* and write hosts and events to their tables."""
        logger.info("registering_status", hosts=len(hosts))

        events = [event for host in hosts.values() for event in host.detach_events()]
        host_items = [host.to_item() for host in hosts.values()]
        event_items = [event.to_item() for event in events]

        (host_writes, host_units), (event_writes, event_units) = await asyncio.gather(
            self._persist(self._hosts_table, host_items),
            self._persist(self._events_table, event_items),
        )
        return RunResult(
            writes=host_writes + event_writes,
            items=host_units + event_units,
        )

    async def _persist(self, table: str, records: Sequence[Item]) -> tuple[int, float]:
        batches = chunk(records, self._batch_size)
        if not batches:
            return 0, 0.0
        units = await asyncio.gather(*(self._flush(table, batch) for batch in batches))
        return len(batches), sum(units)

    async def _flush(self, table: str, batch: list[Item]) -> float:
        logger.debug("flushing_batch", table=table, size=len(batch))
        return await self._store.write(table, batch)
