"""Kernel-level ORM models shared by every module."""

from pulse_kernel.models.user import MemberRole, User

__all__ = [
    "MemberRole",
    "User",
]
