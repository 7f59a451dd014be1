"""
Property-based tests for the analytics rollups.

Properties checked for arbitrary generated records:
- Distributions are total: every enum key present, values sum to the count.
- Every rate is 0 when its denominator is 0.
- Utilization classification is total and mutually exclusive.
- This-week hours never exceed total hours.
- A pending expense never changes spent or the utilization rate.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from hypothesis import given, settings
from hypothesis import strategies as st

from pulse_engines.rates import percentage
from pulse_modules.analytics.rollups import (
    summarize_budgets,
    summarize_projects,
    summarize_tasks,
    summarize_time,
    task_distribution,
    team_workload,
)
from pulse_modules.budget.models import Budget, Expense, ExpenseStatus
from pulse_modules.projects.models import Project, ProjectStatus
from pulse_modules.resources.models import UtilizationStatus
from pulse_modules.resources.utilization import classify_utilization, summarize_team
from pulse_modules.tasks.models import Task, TaskPriority, TaskStatus
from pulse_modules.time_tracking.models import TimeEntry

NOW = datetime(2024, 6, 12, 12, 0, tzinfo=timezone.utc)

instants = st.integers(min_value=-60 * 24 * 30, max_value=60 * 24 * 30).map(
    lambda minutes: NOW + timedelta(minutes=minutes)
)
amounts = st.decimals(min_value=0, max_value=10_000_000, places=2, allow_nan=False)


@st.composite
def projects(draw):
    return Project(
        id=uuid4(),
        name=draw(st.text(min_size=1, max_size=10)),
        status=draw(st.sampled_from(list(ProjectStatus))),
        end_date=draw(st.one_of(st.none(), instants.map(lambda d: d.date()))),
    )


@st.composite
def tasks(draw):
    status = draw(st.sampled_from(list(TaskStatus)))
    return Task(
        id=uuid4(),
        project_id=uuid4(),
        title="t",
        status=status,
        priority=draw(st.sampled_from(list(TaskPriority))),
        due_date=draw(st.one_of(st.none(), instants)),
        completed_at=draw(st.one_of(st.none(), instants)) if status == TaskStatus.DONE else None,
        assignee_id=draw(st.sampled_from([None, uuid4(), uuid4()])),
        duration=draw(st.one_of(st.none(), st.integers(min_value=0, max_value=80))),
    )


@st.composite
def time_entries(draw):
    return TimeEntry(
        id=uuid4(),
        user_id=uuid4(),
        task_id=uuid4(),
        start_time=draw(instants),
        duration=draw(st.one_of(st.none(), st.integers(min_value=0, max_value=600))),
        is_billable=draw(st.booleans()),
    )


def _expense(amount, status):
    return Expense(
        id=uuid4(), budget_id=uuid4(), amount=amount,
        expense_date=date(2024, 6, 1), status=status,
    )


@given(st.lists(projects(), max_size=30))
def test_project_distribution_sums_to_total(items):
    summary = summarize_projects(items, now=NOW)
    assert set(summary.status_distribution) == set(ProjectStatus)
    assert sum(summary.status_distribution.values()) == summary.total
    assert 0 <= summary.completion_rate <= 100


@given(st.lists(tasks(), max_size=40))
def test_task_distributions_sum_to_total(items):
    summary = summarize_tasks(items, now=NOW)
    assert sum(summary.status_distribution.values()) == summary.total
    assert sum(summary.priority_distribution.values()) == summary.total
    assert summary.active + summary.completed == summary.total
    assert summary.on_time + summary.overdue == summary.active
    assert sum(r.count for r in task_distribution(items)) == summary.total


@given(st.lists(time_entries(), max_size=40))
def test_this_week_never_exceeds_total(entries):
    summary = summarize_time(entries, now=NOW)
    assert summary.this_week_hours <= summary.total_hours
    assert summary.billable_hours <= summary.total_hours


@given(st.lists(time_entries(), max_size=40), st.lists(tasks(), max_size=20))
def test_time_utilization_zero_without_plan(entries, items):
    summary = summarize_time(entries, now=NOW, tasks=items)
    assert summary.utilization_rate >= 0
    if summary.planned_hours == 0:
        assert summary.utilization_rate == 0


@given(
    st.decimals(min_value=0, max_value=1_000_000, places=3, allow_nan=False),
)
def test_utilization_classification_is_total_and_exclusive(value):
    status = classify_utilization(value)
    matches = [
        value == 0,
        0 < value < 100,
        value == 100,
        value > 100,
    ]
    assert sum(matches) == 1
    expected = [
        UtilizationStatus.AVAILABLE,
        UtilizationStatus.PARTIALLY_ALLOCATED,
        UtilizationStatus.BUSY,
        UtilizationStatus.OVERLOADED,
    ][matches.index(True)]
    assert status is expected


@given(amounts, st.lists(amounts, max_size=10), amounts)
@settings(max_examples=200)
def test_pending_expense_leaves_spend_unchanged(total, approved, pending):
    expenses = tuple(_expense(a, ExpenseStatus.APPROVED) for a in approved)
    before = summarize_budgets([
        Budget(id=uuid4(), project_id=uuid4(), total_budget=total, expenses=expenses)
    ])
    after = summarize_budgets([
        Budget(
            id=uuid4(), project_id=uuid4(), total_budget=total,
            expenses=expenses + (_expense(pending, ExpenseStatus.PENDING),),
        )
    ])
    assert after.total_spent == before.total_spent
    assert after.utilization_rate == before.utilization_rate


@given(st.integers(min_value=0, max_value=10_000))
def test_zero_denominator_rates_are_zero(numerator):
    assert percentage(numerator, 0) == 0
    assert summarize_budgets([]).utilization_rate == 0
    assert summarize_team([]).avg_utilization == 0


@given(st.lists(tasks(), max_size=40))
def test_workload_percentages_bounded(items):
    for row in team_workload(items, users={}):
        assert 0 < row.total_task_count
        assert 0 <= row.workload_percentage <= 100
        assert row.completed_task_count <= row.total_task_count
