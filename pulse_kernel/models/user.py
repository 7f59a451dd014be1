"""
Module: pulse_kernel.models.user
Responsibility: ORM persistence for the people who own projects, hold
    memberships, get tasks assigned and log time.  Users are the identity
    anchor for dashboard scoping and for the team-workload rollup.
Architecture position: Kernel > Models.  May import from db/base.py only.

Failure modes:
    - IntegrityError on duplicate email (uq_user_email constraint).
"""

from enum import Enum

from sqlalchemy import Boolean, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pulse_kernel.db.base import TrackedBase


class MemberRole(str, Enum):
    """Role a user holds, globally or on a single project membership.

    Contract: ADMIN sees every project on the dashboard; MANAGER memberships
    populate the manager dropdown; MEMBER is the default.
    """

    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"


class User(TrackedBase):
    """
    A person using ProjectPulse.

    Guarantees:
        - email is globally unique.
        - display_name is always "first last" with surrounding space trimmed.
    """

    __tablename__ = "users"

    __table_args__ = (
        UniqueConstraint("email", name="uq_user_email"),
        Index("idx_user_role", "role"),
    )

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)
    role: Mapped[MemberRole] = mapped_column(
        String(20),
        nullable=False,
        default=MemberRole.MEMBER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<User {self.email} [{self.role}]>"
