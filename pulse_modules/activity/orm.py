"""
SQLAlchemy ORM persistence model for the activity log.

Invariants enforced
-------------------
* Append-only: the analytics path only reads rows.
* ``entity_id`` is polymorphic over ``entity_type``; there is no foreign key.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse_kernel.db.base import TrackedBase
from pulse_kernel.models.user import User


class ActivityLogModel(TrackedBase):
    """
    Something a user did to a project, task, budget, expense or time entry.

    Maps to the ``ActivityEntry`` DTO in ``pulse_modules.activity.models``.
    """

    __tablename__ = "activity_logs"

    __table_args__ = (
        Index("idx_activity_entity", "entity_type", "entity_id"),
        Index("idx_activity_occurred", "occurred_at"),
    )

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[UUID] = mapped_column(nullable=False)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(nullable=False)

    # Relationships
    user: Mapped[User] = relationship(User, lazy="joined")

    def to_dto(self):
        from pulse_modules.activity.models import ActivityAction, ActivityEntry, EntityType

        return ActivityEntry(
            id=self.id,
            user_id=self.user_id,
            user_name=self.user.display_name if self.user else "",
            user_avatar=self.user.avatar if self.user else None,
            action=ActivityAction(self.action),
            entity_type=EntityType(self.entity_type),
            entity_id=self.entity_id,
            occurred_at=self.occurred_at,
            details=dict(self.details or {}),
        )

    def __repr__(self) -> str:
        return f"<ActivityLogModel {self.action} {self.entity_type}:{self.entity_id}>"
