"""
Analytics Service (``pulse_modules.analytics.service``).

Responsibility
--------------
Builds the dashboard snapshot and per-project analytics: resolves the
caller's project scope, fetches every record set through
``DashboardSelector`` and reduces them with the pure functions in
``rollups.py``.

Architecture position
---------------------
**Modules layer** -- thin orchestration.  ``AnalyticsService`` is the sole
public entry point for analytics reads.  It owns no transaction; the
caller's session is only read from.

Invariants enforced
-------------------
* One clock reading per call.  ``generated_at``, overdue checks, the
  current week and deadline labels all use the same instant.
* A dashboard scoped to an unknown or invisible project is empty, not an
  error.
* All-or-nothing: a failed fetch aborts the whole snapshot.

Failure modes
-------------
* Fetch failure  -> ``DataUnavailableError`` (from the selector).
* Project analytics for an unknown project  -> ``ProjectNotFoundError``.
* Project analytics by a non-member, non-admin  -> ``AccessDeniedError``.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from pulse_kernel.domain.clock import Clock, SystemClock
from pulse_kernel.exceptions import AccessDeniedError, ProjectNotFoundError
from pulse_kernel.logging_config import LogContext, get_logger
from pulse_kernel.models.user import MemberRole
from pulse_engines.rates import percentage, zero_filled_distribution
from pulse_modules.analytics.config import AnalyticsConfig
from pulse_modules.analytics.models import (
    DashboardFilter,
    DashboardSnapshot,
    FilterOption,
    FilterOptions,
    ProjectAnalytics,
    RequestContext,
    UserRef,
)
from pulse_modules.analytics.rollups import (
    budget_breakdown,
    burn_down,
    project_performance,
    summarize_budgets,
    summarize_projects,
    summarize_tasks,
    summarize_time,
    task_distribution,
    tasks_by_assignee,
    team_workload,
    upcoming_deadlines,
)
from pulse_modules.analytics.selector import DashboardSelector
from pulse_modules.projects.models import ProjectStatus
from pulse_modules.tasks.models import TaskStatus

logger = get_logger("modules.analytics.service")


class AnalyticsService:
    """
    Dashboard and project analytics read service.

    Usage:
        service = AnalyticsService(session, clock, config)
        snapshot = service.get_dashboard_snapshot(
            RequestContext(user_id=user.id, role=MemberRole.MANAGER),
            DashboardFilter(start_date=start, end_date=end),
        )
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: AnalyticsConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or AnalyticsConfig()
        self._selector = DashboardSelector(session)

    def get_dashboard_snapshot(
        self,
        context: RequestContext,
        filters: DashboardFilter | None = None,
    ) -> DashboardSnapshot:
        """Compute every dashboard section for the caller's scope."""
        filters = filters or DashboardFilter()
        now = self._clock.now_utc()
        cfg = self._config

        with LogContext.bind(actor_id=context.user_id, project_id=filters.project_id):
            logger.info(
                "dashboard_snapshot_started",
                extra={
                    "role": context.role,
                    "start_date": filters.start_date,
                    "end_date": filters.end_date,
                },
            )

            projects = self._selector.fetch_projects(context, filters.project_id)
            project_ids = [p.id for p in projects]
            tasks = self._selector.fetch_tasks(project_ids)
            entries = self._selector.fetch_time_entries(
                project_ids, filters.start_date, filters.end_date
            )
            budgets = self._selector.fetch_budgets_with_expenses(project_ids)
            members = self._selector.fetch_members(project_ids)
            activities = self._selector.fetch_activities(
                project_ids,
                [t.id for t in tasks],
                filters.start_date,
                filters.end_date,
                limit=cfg.recent_activity_limit,
            )

            manager_ids = list(dict.fromkeys(
                m.user_id for m in members if m.role == MemberRole.MANAGER
            ))
            assignee_ids = {t.assignee_id for t in tasks if t.assignee_id is not None}
            users = self._users_by_id(set(manager_ids) | assignee_ids)

            task_summary = summarize_tasks(tasks, now=now, window=filters)
            snapshot = DashboardSnapshot(
                generated_at=now,
                projects=summarize_projects(projects, now=now),
                tasks=task_summary,
                time=summarize_time(entries, now=now, tasks=tasks),
                budget=summarize_budgets(budgets, window=filters),
                completion_rate=task_summary.completion_rate,
                total_members=len({m.user_id for m in members}),
                recent_activities=tuple(activities),
                upcoming_deadlines=upcoming_deadlines(
                    tasks,
                    now=now,
                    at_risk_days=cfg.at_risk_days,
                    limit=cfg.upcoming_deadline_limit,
                ),
                team_workload=team_workload(tasks, users=users),
                task_distribution=task_distribution(tasks),
                project_performance=project_performance(
                    projects,
                    tasks,
                    now=now,
                    horizon_days=cfg.performance_horizon_days,
                    at_risk_rate=cfg.performance_at_risk_rate,
                ),
                filters=FilterOptions(
                    projects=tuple(FilterOption(id=p.id, name=p.name) for p in projects),
                    managers=tuple(sorted(
                        (
                            FilterOption(id=uid, name=users[uid].name)
                            for uid in manager_ids
                            if uid in users
                        ),
                        key=lambda o: (o.name, str(o.id)),
                    )),
                    statuses=tuple(s.value for s in ProjectStatus),
                ),
            )

            logger.info(
                "dashboard_snapshot_completed",
                extra={
                    "project_count": len(projects),
                    "task_count": len(tasks),
                    "time_entry_count": len(entries),
                    "budget_count": len(budgets),
                    "activity_count": len(activities),
                },
            )
            return snapshot

    def get_project_analytics(self, context: RequestContext, project_id: UUID) -> ProjectAnalytics:
        """Progress, assignee spread, burn-down and budget of one project.

        Raises:
            ProjectNotFoundError: If no project has this id.
            AccessDeniedError: If the caller is neither admin nor a member.
        """
        now = self._clock.now_utc()
        cfg = self._config

        with LogContext.bind(actor_id=context.user_id, project_id=project_id):
            logger.info("project_analytics_started")

            project = self._selector.fetch_project(project_id)
            if project is None:
                logger.warning("project_not_found")
                raise ProjectNotFoundError(project_id)

            if not context.is_admin:
                members = self._selector.fetch_members([project_id])
                if not any(m.user_id == context.user_id for m in members):
                    logger.warning("project_access_denied")
                    raise AccessDeniedError(context.user_id, project_id)

            tasks = self._selector.fetch_tasks([project_id])
            budgets = self._selector.fetch_budgets_with_expenses([project_id])
            users = self._users_by_id(
                {t.assignee_id for t in tasks if t.assignee_id is not None}
            )

            done = sum(1 for t in tasks if t.is_done)
            analytics = ProjectAnalytics(
                project_id=project_id,
                task_progress=percentage(done, len(tasks)),
                tasks_by_status=zero_filled_distribution((t.status for t in tasks), TaskStatus),
                tasks_by_assignee=tasks_by_assignee(tasks, users),
                burn_down=burn_down(tasks, now=now, days=cfg.burn_down_days),
                budget=budget_breakdown(budgets[0] if budgets else None),
            )

            logger.info(
                "project_analytics_completed",
                extra={"task_count": len(tasks), "task_progress": analytics.task_progress},
            )
            return analytics

    def _users_by_id(self, user_ids: set[UUID]) -> dict[UUID, UserRef]:
        return {u.id: u for u in self._selector.fetch_users(sorted(user_ids, key=str))}
