"""Configuration handling for the dollar rates service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import yaml

DEFAULT_SOURCE_URL = "https://www.bcv.org.ve/"


class ConfigError(ValueError):
    """Raised when configuration files are invalid or incomplete."""


@dataclass
class AppConfig:
    """Runtime settings for the scraper and the HTTP API."""

    port: int
    interval_ms: int
    host: str = "127.0.0.1"
    timeout_seconds: float = 10.0
    source_url: str = DEFAULT_SOURCE_URL

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000


def _require_int(data: Dict[str, Any], key: str) -> int:
    if key not in data or data[key] is None:
        raise ConfigError(f"Missing required field {key!r}")
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Field {key!r} must be an integer, got {value!r}")
    return value


def load_config(path: str) -> AppConfig:
    """Load application settings from a YAML file."""
    try:
        raw = yaml.safe_load(_read_file(path))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must be a mapping/object.")

    port = _require_int(raw, "port")
    if not 0 < port < 65536:
        raise ConfigError(f"port must be between 1 and 65535, got {port}")
    interval_ms = _require_int(raw, "interval_ms")
    if interval_ms <= 0:
        raise ConfigError(f"interval_ms must be positive, got {interval_ms}")

    timeout = raw.get("timeout_seconds", AppConfig.timeout_seconds)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"timeout_seconds must be a positive number, got {timeout!r}")

    return AppConfig(
        port=port,
        interval_ms=interval_ms,
        host=str(raw.get("host", AppConfig.host)),
        timeout_seconds=float(timeout),
        source_url=str(raw.get("source_url", DEFAULT_SOURCE_URL)),
    )


def _read_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {path}") from exc
