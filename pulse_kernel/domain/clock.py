"""
Injectable time source.

"Now" decides which allocations are active, which tasks are overdue, which
week is the current one and how a deadline is labelled.  Services therefore
take a ``Clock`` and read it exactly once per call; nothing below the
service layer asks for the time.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current instant, always timezone-aware UTC."""

    @abstractmethod
    def now_utc(self) -> datetime:
        ...


class SystemClock(Clock):
    """Wall-clock time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock that returns a pinned instant until moved.

    Usage:
        clock = DeterministicClock(datetime(2024, 6, 12, 12, tzinfo=timezone.utc))
        clock.advance(timedelta(days=1))
    """

    def __init__(self, pinned: datetime):
        self._pinned = self._checked(pinned)

    @staticmethod
    def _checked(instant: datetime) -> datetime:
        if instant.tzinfo is None:
            raise ValueError(f"DeterministicClock needs an aware datetime, got {instant!r}")
        return instant.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._pinned

    def set_time(self, instant: datetime) -> None:
        self._pinned = self._checked(instant)

    def advance(self, delta: timedelta) -> None:
        self._pinned += delta
