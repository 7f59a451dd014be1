"""
Projects Module (``pulse_modules.projects``).

Projects and memberships.  Read-only from the analytics layer's point of
view: the module provides DTOs and ORM tables, nothing else.
"""

from pulse_modules.projects.models import Project, ProjectMember, ProjectStatus

__all__ = [
    "Project",
    "ProjectMember",
    "ProjectStatus",
]
