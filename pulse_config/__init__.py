"""
pulse_config -- single public entrypoint for runtime configuration.

Responsibility:
    ``get_active_config()`` is the only way to obtain configuration.
    Defaults ship in ``defaults.yaml`` next to this file; a different file
    may be passed, and ``PULSE_DATABASE_URL`` / ``PULSE_LOG_LEVEL``
    override whatever the file says.

Architecture position:
    Configuration -- sits above ``pulse_kernel`` and ``pulse_modules``.  The
    kernel never imports from here.

Failure modes:
    - ``ConfigurationError`` for a missing file, malformed YAML, unknown
      keys or invalid values.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pulse_config.loader import apply_env_overrides, load_yaml_file, parse_config
from pulse_config.schema import DatabaseConfig, LoggingConfig, PulseConfig

_logger = logging.getLogger("pulse_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DatabaseConfig",
    "LoggingConfig",
    "PulseConfig",
    "get_active_config",
]


def get_active_config(
    config_path: Path | str | None = None,
    env: Mapping[str, str] | None = None,
) -> PulseConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to read.  Defaults to the bundled
            ``defaults.yaml``.
        env: Environment mapping for overrides.  Defaults to ``os.environ``.

    Returns:
        A frozen ``PulseConfig``.

    Raises:
        ConfigurationError: If the file cannot be parsed into a valid config.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    data = apply_env_overrides(load_yaml_file(path), os.environ if env is None else env)
    config = parse_config(str(path), data)

    _logger.info(
        "PULSE_CONFIG_TRACE",
        extra={
            "trace_type": "PULSE_CONFIG_TRACE",
            "config_path": str(path),
            "log_level": config.logging.level,
            "at_risk_days": config.analytics.at_risk_days,
            "upcoming_deadline_limit": config.analytics.upcoming_deadline_limit,
        },
    )
    return config
