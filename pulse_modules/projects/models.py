"""
Project Domain Models (``pulse_modules.projects.models``).

Responsibility
--------------
Frozen dataclass value objects for projects and their memberships, as handed
out by selectors and consumed by the analytics rollups.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* ``ProjectStatus`` is a closed domain; distributions iterate over it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from pulse_kernel.models.user import MemberRole


class ProjectStatus(str, Enum):
    """Project lifecycle states."""
    PLANNED = "planned"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Project:
    """A project as seen by the analytics layer."""
    id: UUID
    name: str
    status: ProjectStatus = ProjectStatus.PLANNED
    start_date: date | None = None
    end_date: date | None = None
    created_by_id: UUID | None = None
    is_archived: bool = False


@dataclass(frozen=True)
class ProjectMember:
    """A user's membership on a project."""
    project_id: UUID
    user_id: UUID
    role: MemberRole = MemberRole.MEMBER
