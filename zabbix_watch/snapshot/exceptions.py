"""Snapshot assembly exceptions."""

from __future__ import annotations


class SnapshotError(Exception):
    """Base exception for snapshot assembly errors."""


class MissingHostError(SnapshotError):
    """A trigger references a host absent from the host snapshot."""

    def __init__(self, host_id: str, trigger_id: str) -> None:
        self.host_id = host_id
        self.trigger_id = trigger_id
        super().__init__(f"Trigger {trigger_id} references unknown host {host_id}")
