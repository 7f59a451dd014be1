"""
Module: pulse_modules.analytics.selector
Responsibility: The fetch boundary of the dashboard.  One method per record
    set the rollups consume; each returns frozen DTOs.
Architecture position: Modules > Analytics.  Subclasses the kernel
    ``BaseSelector``; imported only by ``AnalyticsService``.

Invariants enforced:
    - Read-only: no add, flush, delete or commit.
    - Archived projects and archived tasks are never returned by the
      dashboard queries.
    - Non-admin callers only see projects they are a member of.
    - An empty id list short-circuits to an empty result without a query.

Failure modes:
    - DataUnavailableError on any driver or SQL failure.
"""

from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, or_, select

from pulse_kernel.models.user import User
from pulse_kernel.selectors.base import BaseSelector
from pulse_modules.activity.models import ActivityEntry, EntityType
from pulse_modules.activity.orm import ActivityLogModel
from pulse_modules.analytics.models import RequestContext, UserRef
from pulse_modules.budget.models import Budget
from pulse_modules.budget.orm import BudgetModel
from pulse_modules.projects.models import Project, ProjectMember
from pulse_modules.projects.orm import ProjectMemberModel, ProjectModel
from pulse_modules.tasks.models import Task
from pulse_modules.tasks.orm import TaskModel
from pulse_modules.time_tracking.models import TimeEntry
from pulse_modules.time_tracking.orm import TimeEntryModel


class DashboardSelector(BaseSelector[ProjectModel]):
    """Selector for every record set behind the dashboard."""

    def fetch_projects(
        self,
        context: RequestContext,
        project_id: UUID | None = None,
    ) -> list[Project]:
        """Non-archived projects visible to the caller, optionally narrowed to one."""

        def run() -> list[Project]:
            stmt = select(ProjectModel).where(ProjectModel.is_archived.is_(False))
            if not context.is_admin:
                member_of = select(ProjectMemberModel.project_id).where(
                    ProjectMemberModel.user_id == context.user_id
                )
                stmt = stmt.where(ProjectModel.id.in_(member_of))
            if project_id is not None:
                stmt = stmt.where(ProjectModel.id == project_id)
            stmt = stmt.order_by(ProjectModel.name, ProjectModel.id)
            return [p.to_dto() for p in self.session.scalars(stmt)]

        return self._fetch("projects", run)

    def fetch_project(self, project_id: UUID) -> Project | None:
        """A single project by id, archived or not."""

        def run() -> Project | None:
            project = self.session.get(ProjectModel, project_id)
            return project.to_dto() if project is not None else None

        return self._fetch("projects", run)

    def fetch_tasks(self, project_ids: Sequence[UUID]) -> list[Task]:
        """Non-archived tasks of the given projects."""
        if not project_ids:
            return []

        def run() -> list[Task]:
            stmt = (
                select(TaskModel)
                .where(
                    TaskModel.project_id.in_(project_ids),
                    TaskModel.is_archived.is_(False),
                )
                .order_by(TaskModel.created_at, TaskModel.id)
            )
            return [t.to_dto() for t in self.session.scalars(stmt)]

        return self._fetch("tasks", run)

    def fetch_time_entries(
        self,
        project_ids: Sequence[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[TimeEntry]:
        """Time entries on non-archived tasks of the projects, by ``start_time``."""
        if not project_ids:
            return []

        def run() -> list[TimeEntry]:
            stmt = (
                select(TimeEntryModel)
                .join(TaskModel, TimeEntryModel.task_id == TaskModel.id)
                .where(
                    TaskModel.project_id.in_(project_ids),
                    TaskModel.is_archived.is_(False),
                )
            )
            if start is not None:
                stmt = stmt.where(TimeEntryModel.start_time >= start)
            if end is not None:
                stmt = stmt.where(TimeEntryModel.start_time <= end)
            stmt = stmt.order_by(TimeEntryModel.start_time, TimeEntryModel.id)
            return [e.to_dto() for e in self.session.scalars(stmt)]

        return self._fetch("time_entries", run)

    def fetch_budgets_with_expenses(self, project_ids: Sequence[UUID]) -> list[Budget]:
        """Budgets of the projects with every expense attached."""
        if not project_ids:
            return []

        def run() -> list[Budget]:
            stmt = (
                select(BudgetModel)
                .where(BudgetModel.project_id.in_(project_ids))
                .order_by(BudgetModel.id)
            )
            return [b.to_dto() for b in self.session.scalars(stmt)]

        return self._fetch("budgets", run)

    def fetch_activities(
        self,
        project_ids: Sequence[UUID],
        task_ids: Sequence[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 10,
    ) -> list[ActivityEntry]:
        """Newest-first activity on the projects and their tasks."""
        if not project_ids and not task_ids:
            return []

        def run() -> list[ActivityEntry]:
            targets = []
            if project_ids:
                targets.append(
                    and_(
                        ActivityLogModel.entity_type == EntityType.PROJECT.value,
                        ActivityLogModel.entity_id.in_(project_ids),
                    )
                )
            if task_ids:
                targets.append(
                    and_(
                        ActivityLogModel.entity_type == EntityType.TASK.value,
                        ActivityLogModel.entity_id.in_(task_ids),
                    )
                )
            stmt = select(ActivityLogModel).where(or_(*targets))
            if start is not None:
                stmt = stmt.where(ActivityLogModel.occurred_at >= start)
            if end is not None:
                stmt = stmt.where(ActivityLogModel.occurred_at <= end)
            stmt = stmt.order_by(
                ActivityLogModel.occurred_at.desc(), ActivityLogModel.id
            ).limit(limit)
            return [a.to_dto() for a in self.session.scalars(stmt)]

        return self._fetch("activity_logs", run)

    def fetch_members(self, project_ids: Sequence[UUID]) -> list[ProjectMember]:
        """Memberships on the projects."""
        if not project_ids:
            return []

        def run() -> list[ProjectMember]:
            stmt = (
                select(ProjectMemberModel)
                .where(ProjectMemberModel.project_id.in_(project_ids))
                .order_by(ProjectMemberModel.project_id, ProjectMemberModel.user_id)
            )
            return [m.to_dto() for m in self.session.scalars(stmt)]

        return self._fetch("project_members", run)

    def fetch_users(self, user_ids: Sequence[UUID]) -> list[UserRef]:
        """Display identities for the given users."""
        if not user_ids:
            return []

        def run() -> list[UserRef]:
            stmt = select(User).where(User.id.in_(list(set(user_ids)))).order_by(User.id)
            return [
                UserRef(id=u.id, name=u.display_name, avatar=u.avatar)
                for u in self.session.scalars(stmt)
            ]

        return self._fetch("users", run)
