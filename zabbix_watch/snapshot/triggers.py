"""EventMerger — folds active triggers into the host snapshot."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from zabbix_watch.core.types import Event, EventType, Host, HostStatus, TriggerRecord
from zabbix_watch.snapshot.exceptions import MissingHostError
from zabbix_watch.snapshot.ids import EventIdGenerator

logger = structlog.stdlib.get_logger()


class EventMerger:
    """Appends trigger Events to hosts and raises their status/severity.

    - OK hosts become PROBLEM; OFFLINE hosts stay OFFLINE.
    - Host severity is the max priority seen, never lowered.
    - A trigger naming a host missing from the map raises MissingHostError.
    """

    def __init__(self, ids: EventIdGenerator) -> None:
        self._ids = ids

    def merge(self, hosts: dict[str, Host], triggers: Iterable[TriggerRecord]) -> int:
        """Merge *triggers* into *hosts* in place. Returns the number of events added."""
        added = 0
        for trigger in triggers:
            for ref in trigger.hosts:
                host = hosts.get(ref.hostid)
                if host is None:
                    raise MissingHostError(host_id=ref.hostid, trigger_id=trigger.triggerid)
                self.apply(host, trigger)
                added += 1

        if added:
            logger.info("triggers_merged", events=added)
        return added

    def apply(self, host: Host, trigger: TriggerRecord) -> Event:
        """Record one trigger against one host."""
        last_event = trigger.last_event
        event = Event(
            event_id=self._ids.next(),
            host_id=host.host_id,
            type=EventType.TRIGGER,
            message=trigger.description,
            timestamp=trigger.lastchange,
            maintenance=host.maintenance,
            trigger_id=trigger.triggerid,
            severity=trigger.priority,
            acknowledged=last_event is not None and last_event.acknowledged == "1",
            zabbix_event_id=last_event.eventid if last_event and last_event.eventid else None,
        )
        host.events.append(event)

        if host.status == HostStatus.OK:
            host.status = HostStatus.PROBLEM
        host.severity = max(host.severity, trigger.priority)
        return event
