"""
Task Domain Models (``pulse_modules.tasks.models``).

Frozen dataclass value objects for tasks.  ZERO I/O.

Invariants enforced
-------------------
* ``TaskStatus`` and ``TaskPriority`` are closed domains.
* ``DONE`` is the only terminal status; every other status counts as open.
* ``duration`` is planned effort in whole hours, never negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class TaskStatus(str, Enum):
    """Task workflow states."""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    IN_REVIEW = "in_review"
    BLOCKED = "blocked"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Task:
    """A task as seen by the analytics layer."""
    id: UUID
    project_id: UUID
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    completed_at: datetime | None = None
    assignee_id: UUID | None = None
    progress: int = 0  # 0-100
    is_archived: bool = False
    created_at: datetime | None = None
    duration: int | None = None  # planned hours

    def __post_init__(self) -> None:
        if self.duration is not None and self.duration < 0:
            raise ValueError("Task duration cannot be negative")

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE

    def is_overdue(self, now: datetime) -> bool:
        """Past its due date and not done."""
        return self.due_date is not None and self.due_date < now and not self.is_done
