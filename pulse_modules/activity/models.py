"""Activity log value objects (``pulse_modules.activity.models``)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class ActivityAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    COMMENTED = "commented"
    ASSIGNED = "assigned"
    COMPLETED = "completed"


class EntityType(str, Enum):
    PROJECT = "project"
    TASK = "task"
    BUDGET = "budget"
    EXPENSE = "expense"
    TIME_ENTRY = "time_entry"


@dataclass(frozen=True)
class ActivityEntry:
    """One line of the recent-activity feed, with the acting user resolved."""
    id: UUID
    user_id: UUID
    user_name: str
    user_avatar: str | None
    action: ActivityAction
    entity_type: EntityType
    entity_id: UUID
    occurred_at: datetime
    details: dict[str, Any] = field(default_factory=dict)
