"""Exception hierarchy for the Zabbix JSON-RPC client."""

from __future__ import annotations


class ZabbixError(Exception):
    """Base exception for all Zabbix client errors."""


class ZabbixApiError(ZabbixError):
    """The API answered with a JSON-RPC ``error`` object."""

    def __init__(self, code: int | str, message: str, data: str = "") -> None:
        self.code = code
        self.message = message
        self.data = data
        super().__init__(f"[{code}] {message} {data}")


class ZabbixConnectionError(ZabbixError):
    """Transport-level failure (connect, timeout, HTTP status)."""


class ZabbixParseError(ZabbixError):
    """The API response could not be decoded or validated."""
