"""Domain types — host snapshots, events, raw Zabbix records and run results."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HostStatus(IntEnum):
    """Host status, persisted as an HTTP-like code."""

    OK = 200
    PROBLEM = 500  # Online, but an active trigger
    OFFLINE = 503  # At least one agent unreachable


class EventType(StrEnum):
    """Fixed vocabulary of event kinds."""

    AGENT_ZABBIX = "agent:zabbix"
    AGENT_JMX = "agent:jmx"
    AGENT_SNMP = "agent:snmp"
    TRIGGER = "trigger"
    API = "api"
    API_IO = "api:io"


# ── Snapshot Types ──────────────────────────────────────────────


class Event(BaseModel):
    """One observation attached to a host at snapshot time."""

    event_id: str = Field(serialization_alias="eventid")
    host_id: str = Field(serialization_alias="hostid")
    type: EventType
    message: str = ""
    timestamp: int = 0
    maintenance: bool = False
    # Trigger events only
    trigger_id: str | None = Field(default=None, serialization_alias="triggerid")
    severity: int | None = None
    acknowledged: bool | None = None
    zabbix_event_id: str | None = Field(default=None, serialization_alias="zabbixEventid")

    def to_item(self) -> dict[str, Any]:
        """Storage representation — stored attribute names, no nulls."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Host(BaseModel):
    """Per-host status snapshot with its embedded event log."""

    host_id: str = Field(serialization_alias="hostid")
    name: str = ""
    status: HostStatus = HostStatus.OK
    severity: int = 0
    timestamp: int = 0
    maintenance: bool = False
    maintenance_from: int | None = Field(default=None, serialization_alias="maintenanceFrom")
    events: list[Event] = Field(default_factory=list)

    def detach_events(self) -> list[Event]:
        """Remove and return the host's events."""
        events, self.events = self.events, []
        return events

    def to_item(self) -> dict[str, Any]:
        """Storage representation — events are stored separately."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={"events"},
        )


# ── Zabbix Record Types ─────────────────────────────────────────


class HostRecord(BaseModel):
    """A ``host.get`` result entry.

    Zabbix encodes numbers as strings; timestamps are coerced to int here.
    Availability flags stay strings: ``"2"`` means unavailable.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    hostid: str
    host: str = ""
    maintenance_status: str = "0"
    maintenance_from: int = 0
    available: str = "0"
    error: str = ""
    errors_from: int = 0
    jmx_available: str = "0"
    jmx_error: str = ""
    jmx_errors_from: int = 0
    snmp_available: str = "0"
    snmp_error: str = ""
    snmp_errors_from: int = 0


class TriggerHost(BaseModel):
    """Host reference inside a trigger (``selectHosts``)."""

    hostid: str
    host: str = ""


class TriggerLastEvent(BaseModel):
    """Last event of a trigger (``selectLastEvent``)."""

    eventid: str = ""
    acknowledged: str = "0"


class TriggerRecord(BaseModel):
    """A ``trigger.get`` result entry for an active problem."""

    model_config = ConfigDict(populate_by_name=True)

    triggerid: str
    description: str = ""
    lastchange: int = 0
    priority: int = 0
    hosts: list[TriggerHost] = Field(default_factory=list)
    last_event: TriggerLastEvent | None = Field(default=None, alias="lastEvent")

    @field_validator("last_event", mode="before")
    @classmethod
    def _empty_last_event(cls, value: Any) -> Any:
        # Zabbix returns [] when the trigger has no event
        if value == [] or value == {}:
            return None
        return value


# ── Run Types ───────────────────────────────────────────────────


class RunResult(BaseModel):
    """Summary of one pipeline run."""

    writes: int = 0
    items: float = 0.0
