"""
SQLAlchemy ORM persistence models for the Tasks module.

Invariants enforced
-------------------
* Every task belongs to exactly one project.
* ``progress`` is an integer percentage (0-100); range is enforced by the
  write path, not here.
* ``completed_at`` is set by the write path when status moves to done.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse_kernel.db.base import TrackedBase
from pulse_kernel.models.user import User
from pulse_modules.projects.orm import ProjectModel


class TaskModel(TrackedBase):
    """
    A unit of work inside a project.

    Maps to the ``Task`` DTO in ``pulse_modules.tasks.models``.
    """

    __tablename__ = "tasks"

    __table_args__ = (
        Index("idx_task_project", "project_id"),
        Index("idx_task_assignee", "assignee_id"),
        Index("idx_task_status", "status"),
        Index("idx_task_due_date", "due_date"),
    )

    project_id: Mapped[UUID] = mapped_column(ForeignKey("projects.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="todo")
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    due_date: Mapped[datetime | None] = mapped_column(nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    assignee_id: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    project: Mapped[ProjectModel] = relationship(ProjectModel)
    assignee: Mapped[User | None] = relationship(User, lazy="joined")

    def to_dto(self):
        from pulse_modules.tasks.models import Task, TaskPriority, TaskStatus

        return Task(
            id=self.id,
            project_id=self.project_id,
            title=self.title,
            status=TaskStatus(self.status),
            priority=TaskPriority(self.priority),
            due_date=self.due_date,
            completed_at=self.completed_at,
            assignee_id=self.assignee_id,
            progress=self.progress,
            is_archived=self.is_archived,
            created_at=self.created_at,
            duration=self.duration,
        )

    def __repr__(self) -> str:
        return f"<TaskModel {self.title} [{self.status}]>"
