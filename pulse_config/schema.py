"""
Configuration Schema (``pulse_config.schema``).

Frozen dataclasses describing the parsed configuration.  The analytics
section reuses ``AnalyticsConfig`` from the analytics module so the service
and the file share one definition.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pulse_modules.analytics.config import AnalyticsConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = "sqlite:///projectpulse.db"
    echo: bool = False
    pool_size: int = 10

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("database url cannot be empty")
        if self.pool_size < 1:
            raise ValueError("pool_size must be at least 1")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"

    def __post_init__(self) -> None:
        if self.level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.level!r}")


@dataclass(frozen=True)
class PulseConfig:
    """The whole runtime configuration."""
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
