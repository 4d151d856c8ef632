"""Pydantic settings loaded from YAML configuration with environment overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, SecretStr

_settings: Settings | None = None

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")

# Environment variable → (section, field)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ZABBIX_URL": ("zabbix", "url"),
    "ZABBIX_AUTH": ("zabbix", "auth"),
    "ZABBIX_HOSTID": ("zabbix", "host_id"),
    "MIN_SEVERITY": ("zabbix", "min_severity"),
    "ZABBIX_HOSTS_TABLE": ("store", "hosts_table"),
    "ZABBIX_EVENTS_TABLE": ("store", "events_table"),
    "AWS_REGION": ("store", "region"),
    "LOG_LEVEL": ("logging", "level"),
}


class ConfigError(Exception):
    """Required configuration is missing or invalid."""


class ZabbixConfig(BaseModel):
    """Zabbix JSON-RPC API configuration."""

    url: str = ""
    auth: SecretStr = SecretStr("")
    host_id: str = ""
    min_severity: int = 4
    timeout_secs: float = 10.0


class StoreConfig(BaseModel):
    """Bulk-write store (DynamoDB) configuration."""

    hosts_table: str = "zabbix.hosts"
    events_table: str = "zabbix.events"
    region: str | None = None
    endpoint_url: str | None = None
    batch_size: int = 25


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """Root settings container."""

    zabbix: ZabbixConfig = ZabbixConfig()
    store: StoreConfig = StoreConfig()
    logging: LoggingConfig = LoggingConfig()


def _apply_env_overrides(data: dict[str, Any], environ: dict[str, str]) -> None:
    for var, (section, field) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        node = data.get(section)
        if not isinstance(node, dict):
            node = {}
            data[section] = node
        node[field] = value


def load_settings(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load settings from a YAML file, apply env overrides and cache globally.

    Args:
        path: Path to YAML config. Defaults to config/settings.yaml.
        environ: Environment mapping. Defaults to ``os.environ``.

    Returns:
        Parsed Settings instance.
    """
    global _settings  # noqa: PLW0603

    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    data: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f)
            if isinstance(raw, dict):
                data = raw

    _apply_env_overrides(data, dict(os.environ) if environ is None else environ)

    _settings = Settings(**data)
    return _settings


def get_settings() -> Settings:
    """Return the cached settings, loading defaults if not yet loaded."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Reset the cached settings (useful for testing)."""
    global _settings  # noqa: PLW0603
    _settings = None


def missing_settings(settings: Settings) -> list[str]:
    """Return the names of required settings that are not set."""
    missing: list[str] = []
    if not settings.zabbix.url:
        missing.append("ZABBIX_URL")
    if not settings.zabbix.auth.get_secret_value():
        missing.append("ZABBIX_AUTH")
    if not settings.zabbix.host_id:
        missing.append("ZABBIX_HOSTID")
    return missing


def require_settings(settings: Settings) -> None:
    """Raise ConfigError if any required setting is missing."""
    missing = missing_settings(settings)
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")
