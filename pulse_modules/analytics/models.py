"""
Analytics Domain Models (``pulse_modules.analytics.models``).

Responsibility
--------------
Inputs (caller context, filter) and outputs (one frozen result record per
dashboard sub-section, the assembled snapshot, project analytics) of the
analytics read path.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* Distributions are keyed by a closed enum and carry every member.
* Rates are ints in percent; hours and money are ``Decimal``.
* ``DashboardFilter`` rejects a window whose start is after its end.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pulse_kernel.exceptions import InvalidDateRangeError
from pulse_kernel.models.user import MemberRole
from pulse_modules.activity.models import ActivityEntry
from pulse_modules.projects.models import ProjectStatus
from pulse_modules.tasks.models import TaskPriority, TaskStatus


class DeadlineStatus(str, Enum):
    """Label shown next to an upcoming deadline."""
    DELAYED = "Delayed"
    AT_RISK = "At risk"
    ON_GOING = "On going"


class PerformanceStatus(str, Enum):
    """Schedule health of a project."""
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    DELAYED = "Delayed"


class TaskBucket(str, Enum):
    """Coarse task state shown in the dashboard's distribution chart."""
    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


TASK_BUCKETS: dict[TaskStatus, TaskBucket] = {
    TaskStatus.TODO: TaskBucket.TO_DO,
    TaskStatus.IN_PROGRESS: TaskBucket.IN_PROGRESS,
    TaskStatus.IN_REVIEW: TaskBucket.IN_PROGRESS,
    TaskStatus.BLOCKED: TaskBucket.IN_PROGRESS,
    TaskStatus.DONE: TaskBucket.DONE,
}


# =============================================================================
# Inputs
# =============================================================================


@dataclass(frozen=True)
class RequestContext:
    """Who is asking.  Admins see every project; others see their own."""
    user_id: UUID
    role: MemberRole = MemberRole.MEMBER

    @property
    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN


@dataclass(frozen=True)
class DashboardFilter:
    """Optional time window and project scope for a dashboard snapshot.

    Either bound may be omitted; an omitted bound is open.  Bounds must be
    timezone-aware.
    """
    start_date: datetime | None = None
    end_date: datetime | None = None
    project_id: UUID | None = None

    def __post_init__(self) -> None:
        for bound in (self.start_date, self.end_date):
            if bound is not None and bound.tzinfo is None:
                raise ValueError(f"Filter bounds must be timezone-aware: {bound!r}")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.start_date > self.end_date
        ):
            raise InvalidDateRangeError(self.start_date, self.end_date)

    @property
    def has_window(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    def contains(self, instant: datetime) -> bool:
        if self.start_date is not None and instant < self.start_date:
            return False
        if self.end_date is not None and instant > self.end_date:
            return False
        return True

    def contains_date(self, day: date) -> bool:
        """Date-granular check used for expense dates; bounds are read as UTC days."""
        if self.start_date is not None and day < self.start_date.astimezone(timezone.utc).date():
            return False
        if self.end_date is not None and day > self.end_date.astimezone(timezone.utc).date():
            return False
        return True


@dataclass(frozen=True)
class UserRef:
    """Minimal user identity for labels."""
    id: UUID
    name: str
    avatar: str | None = None


# =============================================================================
# Dashboard sub-sections
# =============================================================================


@dataclass(frozen=True)
class ProjectSummary:
    total: int
    active: int
    completed: int
    on_hold: int
    delayed: int
    completion_rate: int
    status_distribution: dict[ProjectStatus, int]


@dataclass(frozen=True)
class TaskSummary:
    total: int
    active: int
    completed: int
    overdue: int
    on_time: int
    completion_rate: int
    status_distribution: dict[TaskStatus, int]
    priority_distribution: dict[TaskPriority, int]


@dataclass(frozen=True)
class TimeSummary:
    total_hours: Decimal
    billable_hours: Decimal
    non_billable_hours: Decimal
    this_week_hours: Decimal
    planned_hours: Decimal
    utilization_rate: int


@dataclass(frozen=True)
class TaskDistributionEntry:
    bucket: TaskBucket
    count: int
    percentage: int


@dataclass(frozen=True)
class BudgetSummary:
    total_budgeted: Decimal
    total_spent: Decimal
    remaining: Decimal
    utilization_rate: int


@dataclass(frozen=True)
class UpcomingDeadline:
    task_id: UUID
    title: str
    project_id: UUID
    due_date: datetime
    status: DeadlineStatus
    priority: TaskPriority


@dataclass(frozen=True)
class WorkloadEntry:
    user_id: UUID
    name: str
    avatar: str | None
    completed_task_count: int
    total_task_count: int
    workload_percentage: int


@dataclass(frozen=True)
class ProjectPerformance:
    project_id: UUID
    project_name: str
    tasks_completed: int
    total_tasks: int
    completion_rate: int
    status: PerformanceStatus


@dataclass(frozen=True)
class FilterOption:
    id: UUID
    name: str


@dataclass(frozen=True)
class FilterOptions:
    """Dropdown contents for the dashboard; never applied as a filter."""
    projects: tuple[FilterOption, ...] = ()
    managers: tuple[FilterOption, ...] = ()
    statuses: tuple[str, ...] = tuple(s.value for s in ProjectStatus)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard shows, computed against one instant."""
    generated_at: datetime
    projects: ProjectSummary
    tasks: TaskSummary
    time: TimeSummary
    budget: BudgetSummary
    completion_rate: int
    total_members: int
    recent_activities: tuple[ActivityEntry, ...] = ()
    upcoming_deadlines: tuple[UpcomingDeadline, ...] = ()
    team_workload: tuple[WorkloadEntry, ...] = ()
    task_distribution: tuple[TaskDistributionEntry, ...] = ()
    project_performance: tuple[ProjectPerformance, ...] = ()
    filters: FilterOptions = field(default_factory=FilterOptions)


# =============================================================================
# Project analytics
# =============================================================================


@dataclass(frozen=True)
class BurnDownPoint:
    day: date
    remaining_tasks: int


@dataclass(frozen=True)
class ProjectBudgetBreakdown:
    total: Decimal
    spent: Decimal
    remaining: Decimal
    expenses_by_category: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class ProjectAnalytics:
    project_id: UUID
    task_progress: int
    tasks_by_status: dict[TaskStatus, int]
    tasks_by_assignee: dict[str, int]
    burn_down: tuple[BurnDownPoint, ...]
    budget: ProjectBudgetBreakdown
