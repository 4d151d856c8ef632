"""ErrorRecorder — stands in a sentinel host when the host fetch fails."""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from zabbix_watch.core.types import Event, EventType, Host, HostStatus
from zabbix_watch.snapshot.ids import EventIdGenerator
from zabbix_watch.zabbix.exceptions import ZabbixApiError

logger = structlog.stdlib.get_logger()


class ErrorRecorder:
    """Records an upstream failure as a single OFFLINE host keyed by *host_id*.

    *host_id* identifies the monitoring system itself, so the failure
    lands in the same tables as regular host snapshots.
    """

    def __init__(
        self,
        host_id: str,
        ids: EventIdGenerator,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._host_id = host_id
        self._ids = ids
        self._clock = clock

    def record(self, hosts: dict[str, Host], error: Exception) -> Host:
        now = round(self._clock())
        host = Host(
            host_id=self._host_id,
            status=HostStatus.OFFLINE,
            timestamp=now,
            maintenance=False,
        )

        if isinstance(error, ZabbixApiError):
            logger.error(
                "zabbix_api_error",
                code=error.code,
                message=error.message,
                data=error.data,
            )
            event_type = EventType.API
            message = f"[{error.code}] {error.message} {error.data}"
        else:
            logger.error("zabbix_io_error", error=str(error))
            event_type = EventType.API_IO
            message = str(error)

        host.events.append(Event(
            event_id=self._ids.next(),
            host_id=host.host_id,
            type=event_type,
            message=message,
            timestamp=now,
            maintenance=host.maintenance,
        ))
        hosts[host.host_id] = host
        return host
