"""
SQLAlchemy ORM persistence models for the Time Tracking module.

Invariants enforced
-------------------
* A running timer has ``end_time`` and ``duration`` both NULL.
* Entries are indexed by ``start_time`` since every analytics window
  filters on it.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from pulse_kernel.db.base import TrackedBase


class TimeEntryModel(TrackedBase):
    """
    Time logged by a user against a task.

    Maps to the ``TimeEntry`` DTO in ``pulse_modules.time_tracking.models``.
    """

    __tablename__ = "time_entries"

    __table_args__ = (
        Index("idx_time_entry_user", "user_id"),
        Index("idx_time_entry_task", "task_id"),
        Index("idx_time_entry_start", "start_time"),
    )

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    task_id: Mapped[UUID] = mapped_column(ForeignKey("tasks.id"), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    start_time: Mapped[datetime] = mapped_column(nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_billable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def to_dto(self):
        from pulse_modules.time_tracking.models import TimeEntry

        return TimeEntry(
            id=self.id,
            user_id=self.user_id,
            task_id=self.task_id,
            start_time=self.start_time,
            end_time=self.end_time,
            duration=self.duration,
            is_billable=self.is_billable,
        )

    def __repr__(self) -> str:
        return f"<TimeEntryModel task={self.task_id} {self.duration}m>"
