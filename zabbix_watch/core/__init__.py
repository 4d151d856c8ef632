"""Core module — config, types, logging."""

from zabbix_watch.core.config import (
    ConfigError,
    Settings,
    get_settings,
    load_settings,
    missing_settings,
    require_settings,
    reset_settings,
)
from zabbix_watch.core.logging import bind_run_context, setup_logging
from zabbix_watch.core.types import (
    Event,
    EventType,
    Host,
    HostRecord,
    HostStatus,
    RunResult,
    TriggerHost,
    TriggerLastEvent,
    TriggerRecord,
)

__all__ = [
    "ConfigError",
    "Event",
    "EventType",
    "Host",
    "HostRecord",
    "HostStatus",
    "RunResult",
    "Settings",
    "TriggerHost",
    "TriggerLastEvent",
    "TriggerRecord",
    "bind_run_context",
    "get_settings",
    "load_settings",
    "missing_settings",
    "require_settings",
    "reset_settings",
    "setup_logging",
]
