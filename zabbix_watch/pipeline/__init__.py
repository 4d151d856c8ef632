"""Pipeline orchestration — one snapshot run from fetch to persistence."""

from zabbix_watch.pipeline.orchestrator import FetchResult, StatusPipeline, watch_once

__all__ = [
    "FetchResult",
    "StatusPipeline",
    "watch_once",
]
