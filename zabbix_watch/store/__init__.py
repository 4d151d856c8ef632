"""Bulk-write persistence — stores and the batching persister."""

from zabbix_watch.store.base import BulkWriteStore, Item
from zabbix_watch.store.dynamodb import DynamoDBStore
from zabbix_watch.store.exceptions import StoreBatchTooLargeError, StoreError, StoreWriteError
from zabbix_watch.store.memory import MemoryStore
from zabbix_watch.store.persister import BatchPersister, chunk

__all__ = [
    "BatchPersister",
    "BulkWriteStore",
    "DynamoDBStore",
    "Item",
    "MemoryStore",
    "StoreBatchTooLargeError",
    "StoreError",
    "StoreWriteError",
    "chunk",
]
