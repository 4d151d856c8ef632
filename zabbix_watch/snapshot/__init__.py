"""Snapshot assembly — host building, trigger merging, failure sentinel."""

from zabbix_watch.snapshot.exceptions import MissingHostError, SnapshotError
from zabbix_watch.snapshot.hosts import AGENT_UNAVAILABLE, HostSnapshotBuilder
from zabbix_watch.snapshot.ids import EventIdGenerator
from zabbix_watch.snapshot.sentinel import ErrorRecorder
from zabbix_watch.snapshot.triggers import EventMerger

__all__ = [
    "AGENT_UNAVAILABLE",
    "ErrorRecorder",
    "EventIdGenerator",
    "EventMerger",
    "HostSnapshotBuilder",
    "MissingHostError",
    "SnapshotError",
]
