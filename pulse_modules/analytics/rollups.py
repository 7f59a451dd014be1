"""
Dashboard Rollups -- Pure Functions.

All functions are pure: no I/O, no clock, no database.  Each reduces the
records of one domain into one dashboard sub-section.  "Now" and every
threshold are parameters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pulse_engines.rates import (
    minutes_to_hours,
    percentage,
    start_of_day,
    start_of_week,
    zero_filled_distribution,
)
from pulse_engines.tracer import traced_engine
from pulse_modules.analytics.models import (
    BudgetSummary,
    BurnDownPoint,
    DashboardFilter,
    DeadlineStatus,
    PerformanceStatus,
    ProjectBudgetBreakdown,
    ProjectPerformance,
    ProjectSummary,
    TASK_BUCKETS,
    TaskBucket,
    TaskDistributionEntry,
    TaskSummary,
    TimeSummary,
    UpcomingDeadline,
    UserRef,
    WorkloadEntry,
)
from pulse_modules.budget.models import Budget
from pulse_modules.projects.models import Project, ProjectStatus
from pulse_modules.tasks.models import Task, TaskPriority, TaskStatus
from pulse_modules.time_tracking.models import TimeEntry

UNASSIGNED = "Unassigned"
UNCATEGORIZED = "Uncategorized"
ZERO = Decimal("0")


@traced_engine("project_summary", "1.0", fingerprint_fields=("now",))
def summarize_projects(projects: Sequence[Project], *, now: datetime) -> ProjectSummary:
    """Counts by status; "delayed" is an active project past its end date."""
    today = now.date()
    total = len(projects)
    completed = sum(1 for p in projects if p.status == ProjectStatus.COMPLETED)
    return ProjectSummary(
        total=total,
        active=sum(1 for p in projects if p.status == ProjectStatus.ACTIVE),
        completed=completed,
        on_hold=sum(1 for p in projects if p.status == ProjectStatus.ON_HOLD),
        delayed=sum(
            1 for p in projects
            if p.status == ProjectStatus.ACTIVE and p.end_date is not None and p.end_date < today
        ),
        completion_rate=percentage(completed, total),
        status_distribution=zero_filled_distribution((p.status for p in projects), ProjectStatus),
    )


@traced_engine("task_summary", "1.0", fingerprint_fields=("now",))
def summarize_tasks(
    tasks: Sequence[Task],
    *,
    now: datetime,
    window: DashboardFilter | None = None,
) -> TaskSummary:
    """Task counts and distributions.

    ``total``, ``active`` and ``overdue`` describe the current backlog.
    ``completed`` honours the window: with one, only done tasks whose
    ``completed_at`` falls inside it count.
    """
    done = [t for t in tasks if t.is_done]
    if window is not None and window.has_window:
        done = [t for t in done if t.completed_at is not None and window.contains(t.completed_at)]

    total = len(tasks)
    active = sum(1 for t in tasks if not t.is_done)
    overdue = sum(1 for t in tasks if t.is_overdue(now))
    return TaskSummary(
        total=total,
        active=active,
        completed=len(done),
        overdue=overdue,
        on_time=max(0, active - overdue),
        completion_rate=percentage(len(done), total),
        status_distribution=zero_filled_distribution((t.status for t in tasks), TaskStatus),
        priority_distribution=zero_filled_distribution((t.priority for t in tasks), TaskPriority),
    )


@traced_engine("time_summary", "1.1", fingerprint_fields=("now",))
def summarize_time(
    entries: Sequence[TimeEntry],
    *,
    now: datetime,
    tasks: Iterable[Task] = (),
) -> TimeSummary:
    """Hours logged against hours planned.

    ``entries`` are expected to be pre-filtered to the window.  Planned
    hours are the summed ``duration`` of ``tasks``; a task without one
    plans nothing.  ``utilization_rate`` is logged over planned, 0 when
    nothing is planned.
    """
    week_start = start_of_week(now)
    total = sum(e.effective_minutes for e in entries)
    billable = sum(e.effective_minutes for e in entries if e.is_billable)
    this_week = sum(
        e.effective_minutes for e in entries if week_start <= e.start_time <= now
    )
    planned = sum(t.duration or 0 for t in tasks)
    return TimeSummary(
        total_hours=minutes_to_hours(total),
        billable_hours=minutes_to_hours(billable),
        non_billable_hours=minutes_to_hours(total - billable),
        this_week_hours=minutes_to_hours(this_week),
        planned_hours=minutes_to_hours(planned * 60),
        utilization_rate=percentage(total, planned * 60),
    )


@traced_engine("task_distribution", "1.0")
def task_distribution(tasks: Sequence[Task]) -> tuple[TaskDistributionEntry, ...]:
    """Tasks per dashboard bucket, every bucket present, in bucket order."""
    counts = zero_filled_distribution((TASK_BUCKETS[t.status] for t in tasks), TaskBucket)
    return tuple(
        TaskDistributionEntry(bucket=bucket, count=count, percentage=percentage(count, len(tasks)))
        for bucket, count in counts.items()
    )


@traced_engine("budget_summary", "1.0")
def summarize_budgets(
    budgets: Sequence[Budget],
    *,
    window: DashboardFilter | None = None,
) -> BudgetSummary:
    """Budgeted vs approved spend, with expense dates restricted to the window."""
    budgeted = sum((b.total_budget for b in budgets), ZERO)
    spent = sum(
        (
            e.amount
            for b in budgets
            for e in b.expenses
            if e.is_approved and (window is None or window.contains_date(e.expense_date))
        ),
        ZERO,
    )
    return BudgetSummary(
        total_budgeted=budgeted,
        total_spent=spent,
        remaining=budgeted - spent,
        utilization_rate=percentage(spent, budgeted),
    )


def deadline_status(task: Task, *, now: datetime, at_risk_days: int) -> DeadlineStatus:
    """Label an incomplete task with a due date."""
    if task.due_date < now:
        return DeadlineStatus.DELAYED
    if task.due_date <= now + timedelta(days=at_risk_days):
        return DeadlineStatus.AT_RISK
    return DeadlineStatus.ON_GOING


@traced_engine("upcoming_deadlines", "1.0", fingerprint_fields=("now", "at_risk_days", "limit"))
def upcoming_deadlines(
    tasks: Iterable[Task],
    *,
    now: datetime,
    at_risk_days: int,
    limit: int,
) -> tuple[UpcomingDeadline, ...]:
    """Incomplete tasks due from the start of today on, soonest first."""
    today = start_of_day(now)
    candidates = sorted(
        (t for t in tasks if not t.is_done and t.due_date is not None and t.due_date >= today),
        key=lambda t: (t.due_date, str(t.id)),
    )
    return tuple(
        UpcomingDeadline(
            task_id=t.id,
            title=t.title,
            project_id=t.project_id,
            due_date=t.due_date,
            status=deadline_status(t, now=now, at_risk_days=at_risk_days),
            priority=t.priority,
        )
        for t in candidates[:limit]
    )


@traced_engine("team_workload", "1.0")
def team_workload(
    tasks: Iterable[Task],
    *,
    users: Mapping[UUID, UserRef],
) -> tuple[WorkloadEntry, ...]:
    """Per-assignee completed/total task counts; unassigned tasks are skipped."""
    totals: dict[UUID, int] = {}
    completed: dict[UUID, int] = {}
    for task in tasks:
        if task.assignee_id is None:
            continue
        totals[task.assignee_id] = totals.get(task.assignee_id, 0) + 1
        if task.is_done:
            completed[task.assignee_id] = completed.get(task.assignee_id, 0) + 1

    entries = []
    for user_id, total in totals.items():
        user = users.get(user_id)
        done = completed.get(user_id, 0)
        entries.append(
            WorkloadEntry(
                user_id=user_id,
                name=user.name if user else str(user_id),
                avatar=user.avatar if user else None,
                completed_task_count=done,
                total_task_count=total,
                workload_percentage=percentage(done, total),
            )
        )
    entries.sort(key=lambda e: (-e.total_task_count, e.name))
    return tuple(entries)


def performance_status(
    project: Project,
    rate: int,
    *,
    now: datetime,
    horizon_days: int,
    at_risk_rate: int,
) -> PerformanceStatus:
    today = now.date()
    if project.status == ProjectStatus.ON_HOLD:
        return PerformanceStatus.DELAYED
    if project.end_date is not None and project.end_date < today and rate < 100:
        return PerformanceStatus.DELAYED
    if (
        project.end_date is not None
        and project.end_date < today + timedelta(days=horizon_days)
        and rate < at_risk_rate
    ):
        return PerformanceStatus.AT_RISK
    return PerformanceStatus.ON_TRACK


@traced_engine(
    "project_performance", "1.0", fingerprint_fields=("now", "horizon_days", "at_risk_rate")
)
def project_performance(
    projects: Sequence[Project],
    tasks: Iterable[Task],
    *,
    now: datetime,
    horizon_days: int,
    at_risk_rate: int,
) -> tuple[ProjectPerformance, ...]:
    """Completion and schedule health of each project, in project order."""
    totals: dict[UUID, int] = {}
    completed: dict[UUID, int] = {}
    for task in tasks:
        totals[task.project_id] = totals.get(task.project_id, 0) + 1
        if task.is_done:
            completed[task.project_id] = completed.get(task.project_id, 0) + 1

    result = []
    for project in projects:
        total = totals.get(project.id, 0)
        done = completed.get(project.id, 0)
        rate = percentage(done, total)
        result.append(
            ProjectPerformance(
                project_id=project.id,
                project_name=project.name,
                tasks_completed=done,
                total_tasks=total,
                completion_rate=rate,
                status=performance_status(
                    project, rate, now=now, horizon_days=horizon_days, at_risk_rate=at_risk_rate
                ),
            )
        )
    return tuple(result)


# =============================================================================
# Project analytics
# =============================================================================


def tasks_by_assignee(tasks: Iterable[Task], users: Mapping[UUID, UserRef]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for task in tasks:
        if task.assignee_id is None:
            name = UNASSIGNED
        else:
            user = users.get(task.assignee_id)
            name = user.name if user else str(task.assignee_id)
        counts[name] = counts.get(name, 0) + 1
    return counts


@traced_engine("burn_down", "1.0", fingerprint_fields=("now", "days"))
def burn_down(tasks: Sequence[Task], *, now: datetime, days: int) -> tuple[BurnDownPoint, ...]:
    """Open tasks at the end of each of the last ``days`` days, oldest first.

    A task is open at the end of a day if it was created before the next
    midnight and was not completed before it.  Tasks without a creation
    timestamp count as created.
    """
    points = []
    today = start_of_day(now)
    for offset in range(days - 1, -1, -1):
        day_start = today - timedelta(days=offset)
        day_end = day_start + timedelta(days=1)
        remaining = sum(
            1 for t in tasks
            if (t.created_at is None or t.created_at < day_end)
            and (t.completed_at is None or t.completed_at >= day_end)
        )
        points.append(BurnDownPoint(day=day_start.date(), remaining_tasks=remaining))
    return tuple(points)


@traced_engine("budget_breakdown", "1.0")
def budget_breakdown(budget: Budget | None) -> ProjectBudgetBreakdown:
    """Approved spend against the budget, and all expenses by category."""
    if budget is None:
        return ProjectBudgetBreakdown(total=ZERO, spent=ZERO, remaining=ZERO)

    spent = sum((e.amount for e in budget.expenses if e.is_approved), ZERO)
    by_category: dict[str, Decimal] = {}
    for expense in budget.expenses:
        category = expense.category or UNCATEGORIZED
        by_category[category] = by_category.get(category, ZERO) + expense.amount
    return ProjectBudgetBreakdown(
        total=budget.total_budget,
        spent=spent,
        remaining=budget.total_budget - spent,
        expenses_by_category=by_category,
    )
