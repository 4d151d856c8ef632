"""DynamoDB store — async wrapper around boto3 ``batch_write_item``."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

import boto3
import structlog
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from zabbix_watch.core.config import StoreConfig, get_settings
from zabbix_watch.store.base import BulkWriteStore, Item
from zabbix_watch.store.exceptions import StoreError, StoreWriteError

logger = structlog.stdlib.get_logger()

_serializer = TypeSerializer()


def _marshall(item: Item) -> dict[str, Any]:
    """Convert a plain item to DynamoDB attribute-value form."""
    return {key: _serializer.serialize(value) for key, value in item.items()}


def _build_request(table: str, items: Sequence[Item]) -> dict[str, Any]:
    return {
        "RequestItems": {
            table: [{"PutRequest": {"Item": _marshall(item)}} for item in items],
        },
        "ReturnConsumedCapacity": "TOTAL",
    }


def _consumed_capacity(response: dict[str, Any]) -> float:
    return sum(
        float(entry.get("CapacityUnits", 0.0))
        for entry in response.get("ConsumedCapacity", [])
    )


class DynamoDBStore(BulkWriteStore):
    """Writes batches with the synchronous boto3 client off the event loop.

    Unprocessed items reported by DynamoDB are logged, not retried.

    Usage::

        async with DynamoDBStore() as store:
            units = await store.write("zabbix.hosts", items)
    """

    def __init__(self, config: StoreConfig | None = None, client: Any = None) -> None:
        self._config = config or get_settings().store
        self._client = client

    @property
    def client(self) -> Any:
        """The boto3 DynamoDB client, raising if not connected."""
        if self._client is None:
            raise StoreError("Store not connected. Call connect() first.")
        return self._client

    async def connect(self) -> None:
        """Create the boto3 client (credential resolution may block)."""
        if self._client is not None:
            return
        self._client = await asyncio.to_thread(
            boto3.client,
            "dynamodb",
            region_name=self._config.region,
            endpoint_url=self._config.endpoint_url,
        )
        logger.info("dynamodb_connected", region=self._config.region)

    async def close(self) -> None:
        self._client = None

    async def _write(self, table: str, items: Sequence[Item]) -> float:
        request = _build_request(table, items)
        try:
            response = await asyncio.to_thread(self.client.batch_write_item, **request)
        except (ClientError, BotoCoreError) as exc:
            raise StoreWriteError(table, str(exc)) from exc

        unprocessed = response.get("UnprocessedItems", {}).get(table, [])
        if unprocessed:
            logger.warning(
                "dynamodb_unprocessed_items",
                table=table,
                count=len(unprocessed),
                requested=len(items),
            )
        return _consumed_capacity(response)
