"""
Time Tracking Domain Models (``pulse_modules.time_tracking.models``).

Invariants enforced
-------------------
* ``duration`` is in minutes and is authoritative when present.
* Without a stored duration, minutes are derived from ``end_time - start_time``
  (whole minutes, floor); a running timer contributes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TimeEntry:
    """A block of time a user logged against a task."""
    id: UUID
    user_id: UUID
    task_id: UUID
    start_time: datetime
    end_time: datetime | None = None
    duration: int | None = None  # minutes
    is_billable: bool = True

    @property
    def effective_minutes(self) -> int:
        if self.duration is not None:
            return max(self.duration, 0)
        if self.end_time is None:
            return 0
        seconds = (self.end_time - self.start_time).total_seconds()
        return max(int(seconds // 60), 0)
