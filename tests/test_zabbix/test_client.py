"""Tests for the Zabbix JSON-RPC client.

Tests mock ``httpx.AsyncClient.post`` to verify:
- Request payload shape (jsonrpc envelope, auth, params)
- JSON-RPC error → ZabbixApiError
- Transport / HTTP status / decode failures
- Record validation at the fetch boundary
"""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from zabbix_watch.core.config import ZabbixConfig
from zabbix_watch.zabbix.client import ZabbixClient, _parse_result
from zabbix_watch.zabbix.exceptions import (
    ZabbixApiError,
    ZabbixConnectionError,
    ZabbixParseError,
)

_URL = "https://zbx.test/api_jsonrpc.php"

# ── Helpers ─────────────────────────────────────────────────────


def _cfg(**overrides: Any) -> ZabbixConfig:
    return ZabbixConfig(url=_URL, auth="tok", host_id="10084", **overrides)


def _mock_response(body: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code=status_code,
        json=body,
        request=httpx.Request("POST", _URL),
    )


def _rpc(result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "result": result, "id": 1}


# ── _parse_result ──────────────────────────────────────────────


class TestParseResult:
    def test_returns_result(self) -> None:
        assert _parse_result(_rpc([1, 2])) == [1, 2]

    def test_error_object_raises_api_error(self) -> None:
        body = {
            "jsonrpc": "2.0",
            "error": {"code": -32602, "message": "Invalid params.", "data": "Not authorised."},
            "id": 1,
        }
        with pytest.raises(ZabbixApiError) as exc_info:
            _parse_result(body)
        assert exc_info.value.code == -32602
        assert exc_info.value.message == "Invalid params."
        assert exc_info.value.data == "Not authorised."

    def test_missing_result_raises_parse_error(self) -> None:
        with pytest.raises(ZabbixParseError):
            _parse_result({"jsonrpc": "2.0", "id": 1})

    def test_non_dict_body_raises_parse_error(self) -> None:
        with pytest.raises(ZabbixParseError):
            _parse_result(["nope"])


# ── ZabbixClient ────────────────────────────────────────────────


class TestZabbixClientConnect:
    async def test_connect_creates_client(self) -> None:
        client = ZabbixClient(config=_cfg())
        assert not client.connected
        await client.connect()
        assert client.connected
        await client.close()
        assert not client.connected

    async def test_context_manager(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            assert client.connected
        assert not client.connected

    async def test_call_not_connected_raises(self) -> None:
        client = ZabbixClient(config=_cfg())
        with pytest.raises(ZabbixConnectionError, match="not connected"):
            await client.call("host.get", {})

    async def test_injected_http_client_is_not_closed(self) -> None:
        http = httpx.AsyncClient()
        client = ZabbixClient(config=_cfg(), http=http)
        await client.connect()
        await client.close()
        assert not http.is_closed
        await http.aclose()


class TestZabbixClientCall:
    async def test_payload_envelope(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(_rpc([]))
                await client.call("host.get", {"monitored_hosts": True})

        args, kwargs = mock_post.call_args
        assert args[0] == _URL
        assert kwargs["json"] == {
            "jsonrpc": "2.0",
            "method": "host.get",
            "params": {"monitored_hosts": True},
            "auth": "tok",
            "id": 1,
        }

    async def test_http_status_error(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response({}, status_code=502)
                with pytest.raises(ZabbixConnectionError, match="502"):
                    await client.call("host.get", {})

    async def test_connect_error(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.side_effect = httpx.ConnectError("connection refused")
                with pytest.raises(ZabbixConnectionError, match="connection refused"):
                    await client.call("host.get", {})

    async def test_timeout_is_connection_error(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.side_effect = httpx.ReadTimeout("timed out")
                with pytest.raises(ZabbixConnectionError):
                    await client.call("host.get", {})

    async def test_invalid_json(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = httpx.Response(
                    status_code=200,
                    content=b"<html>maintenance</html>",
                    request=httpx.Request("POST", _URL),
                )
                with pytest.raises(ZabbixParseError, match="invalid JSON"):
                    await client.call("host.get", {})

    async def test_api_error(self) -> None:
        body = {"jsonrpc": "2.0", "error": {"code": -32500, "message": "App error.", "data": "x"}, "id": 1}
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(body)
                with pytest.raises(ZabbixApiError):
                    await client.call("host.get", {})


class TestZabbixClientFetch:
    async def test_fetch_hosts(self) -> None:
        result = [{"hostid": "10084", "host": "web-1", "available": "1", "errors_from": "0"}]
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(_rpc(result))
                hosts = await client.fetch_hosts()

        assert [h.hostid for h in hosts] == ["10084"]
        payload = mock_post.call_args.kwargs["json"]
        assert payload["method"] == "host.get"
        assert payload["params"] == {"with_items": True, "monitored_hosts": True}

    async def test_fetch_triggers_uses_min_severity(self) -> None:
        result = [{
            "triggerid": "13491",
            "description": "Disk full",
            "lastchange": "1700000100",
            "priority": "5",
            "hosts": [{"hostid": "10084", "host": "web-1"}],
            "lastEvent": [],
        }]
        async with ZabbixClient(config=_cfg(min_severity=2)) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(_rpc(result))
                triggers = await client.fetch_triggers()

        assert triggers[0].priority == 5
        assert triggers[0].last_event is None
        params = mock_post.call_args.kwargs["json"]["params"]
        assert params["min_severity"] == 2
        assert params["filter"] == {"value": 1}
        assert params["selectHosts"] == ["hostid", "host"]
        assert params["selectLastEvent"] == ["eventid", "acknowledged"]

    async def test_invalid_record_raises_parse_error(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(_rpc([{"host": "no-id"}]))
                with pytest.raises(ZabbixParseError, match="HostRecord"):
                    await client.fetch_hosts()

    async def test_non_list_result_raises_parse_error(self) -> None:
        async with ZabbixClient(config=_cfg()) as client:
            with patch.object(client._http, "post", new_callable=AsyncMock) as mock_post:  # type: ignore[union-attr]
                mock_post.return_value = _mock_response(_rpc({"hostid": "1"}))
                with pytest.raises(ZabbixParseError):
                    await client.fetch_hosts()
