"""StatusPipeline — orchestrates the fetch→merge→persist run."""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import structlog

from zabbix_watch.core.config import Settings
from zabbix_watch.core.logging import bind_run_context
from zabbix_watch.core.types import Host, HostRecord, RunResult, TriggerRecord
from zabbix_watch.snapshot.hosts import HostSnapshotBuilder
from zabbix_watch.snapshot.ids import EventIdGenerator
from zabbix_watch.snapshot.sentinel import ErrorRecorder
from zabbix_watch.snapshot.triggers import EventMerger
from zabbix_watch.store.base import BulkWriteStore
from zabbix_watch.store.persister import BatchPersister
from zabbix_watch.zabbix.client import ZabbixClient
from zabbix_watch.zabbix.exceptions import ZabbixError

logger = structlog.stdlib.get_logger()

R = TypeVar("R")


@dataclass
class FetchResult(Generic[R]):
    """Outcome of one upstream fetch: either records or the error."""

    records: list[R] = field(default_factory=list)
    error: ZabbixError | None = None


async def _fetch(fetch: Callable[[], Awaitable[list[R]]]) -> FetchResult[R]:
    try:
        return FetchResult(records=await fetch())
    except ZabbixError as exc:
        return FetchResult(error=exc)


class StatusPipeline:
    """Runs one snapshot: hosts, then triggers, then persistence.

    - Host fetch failure is recorded as a sentinel host (via ErrorRecorder)
      and the trigger fetch is skipped; the run still persists.
    - Trigger fetch failure is logged and otherwise ignored.
    - MissingHostError and StoreError propagate to the caller.

    Usage::

        pipeline = StatusPipeline(client, persister, own_host_id="10084")
        result = await pipeline.run()
    """

    def __init__(
        self,
        client: ZabbixClient,
        persister: BatchPersister,
        own_host_id: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self._persister = persister
        self._own_host_id = own_host_id
        self._clock = clock

    async def run(self) -> RunResult:
        bind_run_context(uuid.uuid4().hex[:12])
        started = time.monotonic()

        ids = EventIdGenerator(self._clock)
        hosts = await self._collect(ids)
        result = await self._persister.persist_snapshot(hosts)
        logger.info(
            "run_complete",
            writes=result.writes,
            items=result.items,
            elapsed_secs=round(time.monotonic() - started, 3),
        )
        return result

    async def _collect(self, ids: EventIdGenerator) -> dict[str, Host]:
        host_fetch: FetchResult[HostRecord] = await _fetch(self._client.fetch_hosts)
        if host_fetch.error is not None:
            hosts: dict[str, Host] = {}
            ErrorRecorder(self._own_host_id, ids, self._clock).record(hosts, host_fetch.error)
            return hosts

        hosts = HostSnapshotBuilder(ids, self._clock).build_all(host_fetch.records)

        trigger_fetch: FetchResult[TriggerRecord] = await _fetch(self._client.fetch_triggers)
        if trigger_fetch.error is not None:
            logger.warning("trigger_fetch_failed", error=str(trigger_fetch.error))
            return hosts

        EventMerger(ids).merge(hosts, trigger_fetch.records)
        return hosts


async def watch_once(settings: Settings, store: BulkWriteStore) -> RunResult:
    """Run a single snapshot with a fresh Zabbix client against *store*."""
    async with ZabbixClient(settings.zabbix) as client, store:
        persister = BatchPersister(
            store,
            hosts_table=settings.store.hosts_table,
            events_table=settings.store.events_table,
            batch_size=settings.store.batch_size,
        )
        pipeline = StatusPipeline(client, persister, own_host_id=settings.zabbix.host_id)
        return await pipeline.run()
