"""
SQLAlchemy ORM persistence models for the Projects module.

Responsibility
--------------
Database-backed persistence for projects and project memberships.

Architecture position
---------------------
**Modules layer** -- ORM models read by the analytics selector.  Inherits
from ``TrackedBase`` (kernel db layer).

Invariants enforced
-------------------
* Enum fields stored as String(50) for readability and portability.
* (project_id, user_id) is unique on ``ProjectMemberModel``.
* Archiving is a flag, not a status: an archived project keeps its status.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse_kernel.db.base import TrackedBase
from pulse_kernel.models.user import MemberRole, User

# ---------------------------------------------------------------------------
# ProjectModel
# ---------------------------------------------------------------------------


class ProjectModel(TrackedBase):
    """
    A project with tasks, a budget and members.

    Maps to the ``Project`` DTO in ``pulse_modules.projects.models``.

    Guarantees:
        - ``status`` is one of ``ProjectStatus``.
        - ``is_archived`` projects are hidden from every dashboard rollup.
    """

    __tablename__ = "projects"

    __table_args__ = (
        Index("idx_project_status", "status"),
        Index("idx_project_archived", "is_archived"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="planned")
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    members: Mapped[list["ProjectMemberModel"]] = relationship(
        "ProjectMemberModel",
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def to_dto(self):
        from pulse_modules.projects.models import Project, ProjectStatus

        return Project(
            id=self.id,
            name=self.name,
            status=ProjectStatus(self.status),
            start_date=self.start_date,
            end_date=self.end_date,
            created_by_id=self.created_by_id,
            is_archived=self.is_archived,
        )

    def __repr__(self) -> str:
        return f"<ProjectModel {self.name} [{self.status}]>"


# ---------------------------------------------------------------------------
# ProjectMemberModel
# ---------------------------------------------------------------------------


class ProjectMemberModel(TrackedBase):
    """
    A user's membership on a project.

    Guarantees:
        - Belongs to exactly one ``ProjectModel`` and one ``User``.
        - A user holds at most one membership per project.
    """

    __tablename__ = "project_members"

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_member"),
        Index("idx_project_member_user", "user_id"),
    )

    project_id: Mapped[UUID] = mapped_column(ForeignKey("projects.id"), nullable=False)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=MemberRole.MEMBER.value)

    # Relationships
    project: Mapped["ProjectModel"] = relationship(
        "ProjectModel",
        back_populates="members",
    )

    user: Mapped[User] = relationship(User, lazy="joined")

    def to_dto(self):
        from pulse_modules.projects.models import ProjectMember

        return ProjectMember(
            project_id=self.project_id,
            user_id=self.user_id,
            role=MemberRole(self.role),
        )

    def __repr__(self) -> str:
        return f"<ProjectMemberModel project={self.project_id} user={self.user_id} [{self.role}]>"
