"""HostSnapshotBuilder — raw ``host.get`` records to Host snapshots."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from zabbix_watch.core.types import Event, EventType, Host, HostRecord, HostStatus
from zabbix_watch.snapshot.ids import EventIdGenerator

# Sub-agent availability flag meaning "unreachable"
AGENT_UNAVAILABLE = "2"


def _agent_failures(record: HostRecord) -> list[tuple[EventType, str, int]]:
    """Unavailable sub-agents as (type, error, errors_from), primary → JMX → SNMP."""
    agents = [
        (EventType.AGENT_ZABBIX, record.available, record.error, record.errors_from),
        (EventType.AGENT_JMX, record.jmx_available, record.jmx_error, record.jmx_errors_from),
        (EventType.AGENT_SNMP, record.snmp_available, record.snmp_error, record.snmp_errors_from),
    ]
    return [
        (event_type, error, since)
        for event_type, flag, error, since in agents
        if flag == AGENT_UNAVAILABLE
    ]


class HostSnapshotBuilder:
    """Converts host records into Hosts, emitting one Event per failed agent."""

    def __init__(
        self,
        ids: EventIdGenerator,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ids = ids
        self._clock = clock

    def build(self, record: HostRecord) -> Host:
        maintenance = record.maintenance_status == "1"
        host = Host(
            host_id=record.hostid,
            name=record.host,
            timestamp=round(self._clock()),
            maintenance=maintenance,
            maintenance_from=record.maintenance_from if maintenance else None,
        )

        for event_type, error, since in _agent_failures(record):
            host.status = HostStatus.OFFLINE
            host.events.append(Event(
                event_id=self._ids.next(),
                host_id=host.host_id,
                type=event_type,
                message=error,
                timestamp=since,
                maintenance=host.maintenance,
            ))

        return host

    def build_all(self, records: Iterable[HostRecord]) -> dict[str, Host]:
        """Build a host map keyed by host id (later duplicates win)."""
        hosts: dict[str, Host] = {}
        for record in records:
            host = self.build(record)
            hosts[host.host_id] = host
        return hosts
