#!/usr/bin/env python3
"""Snapshot entrypoint — polls Zabbix and persists host status to DynamoDB.

Usage::

    # Single run with default config
    python scripts/run.py

    # Custom config file, repeat every 60 seconds
    python scripts/run.py --config config/settings.yaml --interval 60

    # Write to an in-memory store instead of DynamoDB
    python scripts/run.py --dry-run --log-level DEBUG
"""

from __future__ import annotations

import argparse
import asyncio
import json
import signal
import sys

import structlog

from zabbix_watch.core.config import Settings, load_settings, missing_settings
from zabbix_watch.core.logging import setup_logging
from zabbix_watch.core.types import RunResult
from zabbix_watch.pipeline.orchestrator import watch_once
from zabbix_watch.store.base import BulkWriteStore
from zabbix_watch.store.dynamodb import DynamoDBStore
from zabbix_watch.store.memory import MemoryStore

logger = structlog.get_logger(__name__)


def _make_store(settings: Settings, dry_run: bool) -> BulkWriteStore:
    if dry_run:
        return MemoryStore()
    return DynamoDBStore(settings.store)


async def _run_once(settings: Settings, dry_run: bool) -> RunResult:
    result = await watch_once(settings, _make_store(settings, dry_run))
    print(json.dumps(result.model_dump()))
    return result


async def run(args: argparse.Namespace) -> int:
    """Run one snapshot, or keep polling every ``--interval`` seconds."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    missing = missing_settings(settings)
    if missing:
        for name in missing:
            logger.error("config_missing", setting=name)
        print(f"Missing required settings: {', '.join(missing)}", file=sys.stderr)
        return 1

    if args.interval is None:
        await _run_once(settings, args.dry_run)
        return 0

    # ── Polling loop ─────────────────────────────────────────────
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("shutdown_signal_received")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows: signal handlers not supported on ProactorEventLoop
            pass

    logger.info("watch_started", interval_secs=args.interval, dry_run=args.dry_run)
    while not stop_event.is_set():
        try:
            await _run_once(settings, args.dry_run)
        except Exception:
            logger.exception("run_failed")

        try:
            await asyncio.wait_for(stop_event.wait(), timeout=args.interval)
        except asyncio.TimeoutError:
            pass

    logger.info("watch_stopped")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Snapshot Zabbix host status and triggers into DynamoDB.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Write to an in-memory store instead of DynamoDB",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Repeat every N seconds until interrupted (default: run once)",
    )
    args = parser.parse_args()

    try:
        code = asyncio.run(run(args))
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
