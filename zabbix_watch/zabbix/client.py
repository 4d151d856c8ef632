"""Async JSON-RPC client for the Zabbix API."""

from __future__ import annotations

from types import TracebackType
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from zabbix_watch.core.config import ZabbixConfig, get_settings
from zabbix_watch.core.types import HostRecord, TriggerRecord
from zabbix_watch.zabbix.exceptions import (
    ZabbixApiError,
    ZabbixConnectionError,
    ZabbixParseError,
)

logger = structlog.stdlib.get_logger()

_HOST_PARAMS: dict[str, Any] = {
    "with_items": True,
    "monitored_hosts": True,
}


def _trigger_params(min_severity: int) -> dict[str, Any]:
    """``trigger.get`` parameters selecting active problems at or above *min_severity*."""
    return {
        "filter": {"value": 1},
        "monitored": True,
        "min_severity": min_severity,
        "selectHosts": ["hostid", "host"],
        "selectLastEvent": ["eventid", "acknowledged"],
        "output": "extend",
        "expandDescription": True,
        "expandComment": True,
    }


def _parse_result(body: Any) -> Any:
    """Extract ``result`` from a JSON-RPC response body.

    Raises ZabbixApiError when the body carries an ``error`` object.
    """
    if not isinstance(body, dict):
        raise ZabbixParseError(f"Unexpected response body type: {type(body).__name__}")

    error = body.get("error")
    if error:
        if isinstance(error, dict):
            raise ZabbixApiError(
                code=error.get("code", ""),
                message=str(error.get("message", "")),
                data=str(error.get("data", "")),
            )
        raise ZabbixApiError(code="", message=str(error))

    if "result" not in body:
        raise ZabbixParseError("Response has neither result nor error")
    return body["result"]


def _parse_list(result: Any, model: type[Any]) -> list[Any]:
    if not isinstance(result, list):
        raise ZabbixParseError(f"Expected a list result, got {type(result).__name__}")
    try:
        return [model.model_validate(entry) for entry in result]
    except ValidationError as exc:
        raise ZabbixParseError(f"Invalid {model.__name__}: {exc}") from exc


class ZabbixClient:
    """Minimal Zabbix API client — one POST per JSON-RPC call.

    Usage::

        async with ZabbixClient() as client:
            hosts = await client.fetch_hosts()
            triggers = await client.fetch_triggers()
    """

    def __init__(
        self,
        config: ZabbixConfig | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_settings().zabbix
        self._http = http
        self._owns_http = http is None

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    async def connect(self) -> None:
        """Create the httpx async client."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_secs),
            )
            self._owns_http = True

    async def close(self) -> None:
        """Close the httpx async client if we created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
        self._http = None

    async def __aenter__(self) -> ZabbixClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def call(self, method: str, params: dict[str, Any]) -> Any:
        """Invoke a JSON-RPC method and return its ``result``."""
        if self._http is None:
            raise ZabbixConnectionError("HTTP client not connected")

        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "auth": self._config.auth.get_secret_value(),
            "id": 1,
        }

        try:
            response = await self._http.post(self._config.url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ZabbixConnectionError(
                f"Zabbix API returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ZabbixConnectionError(f"Zabbix API request failed: {exc!r}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ZabbixParseError("Zabbix API returned invalid JSON") from exc

        return _parse_result(body)

    async def fetch_hosts(self) -> list[HostRecord]:
        """Fetch monitored hosts with their agent availability."""
        logger.info("fetching_hosts")
        result = await self.call("host.get", dict(_HOST_PARAMS))
        return _parse_list(result, HostRecord)

    async def fetch_triggers(self) -> list[TriggerRecord]:
        """Fetch active triggers at or above the configured minimum severity."""
        logger.info("fetching_triggers", min_severity=self._config.min_severity)
        result = await self.call("trigger.get", _trigger_params(self._config.min_severity))
        return _parse_list(result, TriggerRecord)
