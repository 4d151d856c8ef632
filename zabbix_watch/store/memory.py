"""In-process store for dry runs and tests."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from zabbix_watch.store.base import BulkWriteStore, Item
from zabbix_watch.store.exceptions import StoreWriteError


class MemoryStore(BulkWriteStore):
    """Drop-in replacement for DynamoDBStore that keeps items in memory.

    Each item costs one capacity unit. Tables listed in *fail_tables*
    reject every write with StoreWriteError.

    Usage::

        store = MemoryStore()
        await store.write("zabbix.hosts", [{"hostid": "1"}])
        store.items("zabbix.hosts")  # → [{"hostid": "1"}]
    """

    def __init__(self, fail_tables: Sequence[str] = ()) -> None:
        self._tables: dict[str, list[Item]] = defaultdict(list)
        self._batches: list[tuple[str, int]] = []
        self._fail_tables = set(fail_tables)

    @property
    def batches(self) -> list[tuple[str, int]]:
        """(table, batch size) for every request received, in arrival order."""
        return list(self._batches)

    def items(self, table: str) -> list[Item]:
        """All items written to *table*."""
        return list(self._tables.get(table, []))

    async def _write(self, table: str, items: Sequence[Item]) -> float:
        self._batches.append((table, len(items)))
        if table in self._fail_tables:
            raise StoreWriteError(table, "simulated failure")
        self._tables[table].extend(dict(item) for item in items)
        return float(len(items))
