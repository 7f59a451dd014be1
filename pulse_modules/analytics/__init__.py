"""
Analytics Module (``pulse_modules.analytics``).

Dashboard snapshot and per-project analytics over projects, tasks, time
entries, budgets and the activity log.
"""

from pulse_modules.analytics.config import AnalyticsConfig
from pulse_modules.analytics.export import dumps, to_plain_data
from pulse_modules.analytics.models import (
    BudgetSummary,
    BurnDownPoint,
    DashboardFilter,
    DashboardSnapshot,
    DeadlineStatus,
    FilterOption,
    FilterOptions,
    PerformanceStatus,
    ProjectAnalytics,
    ProjectBudgetBreakdown,
    ProjectPerformance,
    ProjectSummary,
    RequestContext,
    TaskBucket,
    TaskDistributionEntry,
    TaskSummary,
    TimeSummary,
    UpcomingDeadline,
    UserRef,
    WorkloadEntry,
)
from pulse_modules.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsConfig",
    "AnalyticsService",
    "BudgetSummary",
    "BurnDownPoint",
    "DashboardFilter",
    "DashboardSnapshot",
    "DeadlineStatus",
    "FilterOption",
    "FilterOptions",
    "PerformanceStatus",
    "ProjectAnalytics",
    "ProjectBudgetBreakdown",
    "ProjectPerformance",
    "ProjectSummary",
    "RequestContext",
    "TaskBucket",
    "TaskDistributionEntry",
    "TaskSummary",
    "TimeSummary",
    "UpcomingDeadline",
    "UserRef",
    "WorkloadEntry",
    "dumps",
    "to_plain_data",
]
