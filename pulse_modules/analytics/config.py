"""
Analytics tuning knobs (``pulse_modules.analytics.config``).

The thresholds here used to be magic numbers scattered through the
dashboard code.  They are read from the ``analytics`` section of the
configuration file by ``pulse_config`` and handed to ``AnalyticsService``.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Thresholds and list bounds for the dashboard and project analytics.

    Guarantees:
        - Every field is a non-negative int.
        - ``upcoming_deadline_limit``, ``recent_activity_limit`` and
          ``burn_down_days`` are at least 1.
        - ``performance_at_risk_rate`` is a percentage (0-100).
    """

    at_risk_days: int = 3
    upcoming_deadline_limit: int = 5
    recent_activity_limit: int = 10
    burn_down_days: int = 7
    performance_horizon_days: int = 7
    performance_at_risk_rate: int = 80

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{f.name} cannot be negative")
        for name in ("upcoming_deadline_limit", "recent_activity_limit", "burn_down_days"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")
        if self.performance_at_risk_rate > 100:
            raise ValueError("performance_at_risk_rate must be between 0 and 100")
