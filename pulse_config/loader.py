"""
Configuration Loader (``pulse_config.loader``).

Responsibility
--------------
Reads a YAML file, applies environment overrides and parses the result
into the frozen ``pulse_config.schema`` dataclasses.  Callers use
``pulse_config.get_active_config()``; this module is its implementation.

Invariants enforced
-------------------
* Unknown keys are rejected, so a typo never silently falls back to a
  default.
* Environment variables win over the file.

Failure modes
-------------
* Missing file, malformed YAML, unknown keys or invalid values  ->
  ``ConfigurationError`` naming the file and the offending section.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from pulse_kernel.exceptions import ConfigurationError
from pulse_config.schema import DatabaseConfig, LoggingConfig, PulseConfig
from pulse_modules.analytics.config import AnalyticsConfig

ENV_DATABASE_URL = "PULSE_DATABASE_URL"
ENV_LOG_LEVEL = "PULSE_LOG_LEVEL"

_SECTIONS = {
    "database": DatabaseConfig,
    "logging": LoggingConfig,
    "analytics": AnalyticsConfig,
}


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML file and return its top-level mapping.

    Raises:
        ConfigurationError: if the file is missing, unreadable, not valid
            YAML or not a mapping.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigurationError(str(path), f"cannot read file: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(str(path), f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(str(path), "top level must be a mapping")
    return data


def apply_env_overrides(data: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    """Return a copy of ``data`` with environment overrides applied."""
    merged = {key: dict(value) if isinstance(value, dict) else value for key, value in data.items()}
    if env.get(ENV_DATABASE_URL):
        _section(merged, "database")["url"] = env[ENV_DATABASE_URL]
    if env.get(ENV_LOG_LEVEL):
        _section(merged, "logging")["level"] = env[ENV_LOG_LEVEL].upper()
    return merged


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    if not isinstance(data.get(name), dict):
        data[name] = {}
    return data[name]


def parse_section(source: str, name: str, data: Any):
    """Build one section dataclass, rejecting unknown keys."""
    cls = _SECTIONS[name]
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(source, f"section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(source, f"unknown keys in '{name}': {', '.join(unknown)}")
    try:
        return cls(**data)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(source, f"section '{name}': {exc}") from exc


def parse_config(source: str, data: Mapping[str, Any]) -> PulseConfig:
    """Parse a whole configuration mapping."""
    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        raise ConfigurationError(source, f"unknown sections: {', '.join(unknown)}")
    return PulseConfig(
        database=parse_section(source, "database", data.get("database")),
        logging=parse_section(source, "logging", data.get("logging")),
        analytics=parse_section(source, "analytics", data.get("analytics")),
    )
