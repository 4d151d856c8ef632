"""Zabbix API access — JSON-RPC client and its errors."""

from zabbix_watch.zabbix.client import ZabbixClient
from zabbix_watch.zabbix.exceptions import (
    ZabbixApiError,
    ZabbixConnectionError,
    ZabbixError,
    ZabbixParseError,
)

__all__ = [
    "ZabbixApiError",
    "ZabbixClient",
    "ZabbixConnectionError",
    "ZabbixError",
    "ZabbixParseError",
]
