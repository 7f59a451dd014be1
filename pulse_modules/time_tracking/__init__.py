"""Time Tracking Module (``pulse_modules.time_tracking``)."""

from pulse_modules.time_tracking.models import TimeEntry

__all__ = [
    "TimeEntry",
]
