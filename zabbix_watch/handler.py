"""AWS Lambda entrypoint — one snapshot per invocation."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from zabbix_watch.core.config import load_settings, missing_settings
from zabbix_watch.core.logging import setup_logging
from zabbix_watch.pipeline.orchestrator import watch_once
from zabbix_watch.store.dynamodb import DynamoDBStore

logger = structlog.stdlib.get_logger()


def watch_zabbix(event: Any, context: Any) -> dict[str, Any] | None:
    """Lambda handler. Returns ``{"writes": ..., "items": ...}``.

    Returns None without contacting Zabbix when required settings are missing.
    """
    settings = load_settings()
    setup_logging()

    missing = missing_settings(settings)
    if missing:
        for name in missing:
            logger.error("config_missing", setting=name)
        return None

    result = asyncio.run(watch_once(settings, DynamoDBStore(settings.store)))
    logger.info("done")
    return result.model_dump()
