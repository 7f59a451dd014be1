"""
Pytest fixtures for the pulse test suite.

Provides:
- A fresh in-memory SQLite database with every table, per test
- A deterministic clock pinned to a Wednesday
- ``factory`` for persisting users, projects, tasks, time entries,
  budgets, resources and activity rows with sensible defaults
- Structured log capture
"""

import json
import logging
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Generator
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session

from pulse_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from pulse_kernel.domain.clock import DeterministicClock
from pulse_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from pulse_kernel.models.user import MemberRole, User
from pulse_modules.activity.models import ActivityAction, EntityType
from pulse_modules.activity.orm import ActivityLogModel
from pulse_modules.budget.models import ExpenseStatus
from pulse_modules.budget.orm import BudgetModel, ExpenseModel
from pulse_modules.projects.models import ProjectStatus
from pulse_modules.projects.orm import ProjectMemberModel, ProjectModel
from pulse_modules.resources.models import ResourceType
from pulse_modules.resources.orm import ResourceAllocationModel, ResourceModel
from pulse_modules.tasks.models import TaskPriority, TaskStatus
from pulse_modules.tasks.orm import TaskModel
from pulse_modules.time_tracking.orm import TimeEntryModel

# Test actor ID for all test rows
TEST_ACTOR_ID = uuid4()

# Wednesday; the current week starts Monday 2024-06-10 00:00 UTC.
NOW = datetime(2024, 6, 12, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _suite_logging():
    """JSON logging at DEBUG for the whole run."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _isolated_log_context():
    LogContext.clear()
    yield
    LogContext.clear()


class _JsonCollector(logging.Handler):
    """Formats each record with StructuredFormatter and keeps it parsed."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.setFormatter(StructuredFormatter())
        self.records: list[dict] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(json.loads(self.format(record)))


@pytest.fixture
def captured_logs():
    """
    Records logged under ``pulse_kernel`` during the test, as dicts.

    Usage::

        def test_something(captured_logs, service):
            service.get_team_stats()
            assert any(r["message"] == "team_stats_completed" for r in captured_logs())
    """
    collector = _JsonCollector()
    root = logging.getLogger("pulse_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(collector)
    try:
        yield lambda: list(collector.records)
    finally:
        root.removeHandler(collector)
        root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with every table created."""
    engine = init_engine_from_url("sqlite:///:memory:")
    create_tables()
    yield engine
    reset_engine()


@pytest.fixture
def session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session for testing."""
    sess = get_session()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def test_actor_id() -> UUID:
    """Provide a consistent test actor ID."""
    return TEST_ACTOR_ID


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    """Clock pinned to ``NOW``."""
    return DeterministicClock(NOW)


# =============================================================================
# Row factory
# =============================================================================


class PulseFactory:
    """Persists rows with defaults; every method flushes and returns the ORM object."""

    def __init__(self, session: Session, actor_id: UUID):
        self.session = session
        self.actor_id = actor_id
        self._seq = 0

    def _add(self, obj):
        self.session.add(obj)
        self.session.flush()
        return obj

    def user(self, first_name="Ada", last_name="Lovelace", *, role=MemberRole.MEMBER,
             email=None, avatar=None) -> User:
        self._seq += 1
        return self._add(User(
            email=email or f"user{self._seq}@example.com",
            first_name=first_name,
            last_name=last_name,
            avatar=avatar,
            role=MemberRole(role).value,
            created_by_id=self.actor_id,
        ))

    def project(self, name="Apollo", *, status=ProjectStatus.ACTIVE, start_date=None,
                end_date=None, is_archived=False, members=()) -> ProjectModel:
        project = self._add(ProjectModel(
            name=name,
            status=ProjectStatus(status).value,
            start_date=start_date,
            end_date=end_date,
            is_archived=is_archived,
            created_by_id=self.actor_id,
        ))
        for user, role in members:
            self.member(project, user, role)
        return project

    def member(self, project, user, role=MemberRole.MEMBER) -> ProjectMemberModel:
        return self._add(ProjectMemberModel(
            project_id=project.id,
            user_id=user.id,
            role=MemberRole(role).value,
            created_by_id=self.actor_id,
        ))

    def task(self, project, title="Task", *, status=TaskStatus.TODO,
             priority=TaskPriority.MEDIUM, due_date=None, completed_at=None,
             assignee=None, is_archived=False, created_at=None, progress=0,
             duration=None) -> TaskModel:
        fields = dict(
            project_id=project.id,
            title=title,
            status=TaskStatus(status).value,
            priority=TaskPriority(priority).value,
            due_date=due_date,
            completed_at=completed_at,
            assignee_id=assignee.id if assignee is not None else None,
            is_archived=is_archived,
            progress=progress,
            duration=duration,
            created_by_id=self.actor_id,
        )
        if created_at is not None:
            fields["created_at"] = created_at
        return self._add(TaskModel(**fields))

    def time_entry(self, task, user, start_time, *, duration=None, end_time=None,
                   is_billable=True) -> TimeEntryModel:
        return self._add(TimeEntryModel(
            task_id=task.id,
            user_id=user.id,
            start_time=start_time,
            end_time=end_time,
            duration=duration,
            is_billable=is_billable,
            created_by_id=self.actor_id,
        ))

    def budget(self, project, total_budget="10000", *, currency="USD") -> BudgetModel:
        return self._add(BudgetModel(
            project_id=project.id,
            total_budget=Decimal(total_budget),
            currency=currency,
            created_by_id=self.actor_id,
        ))

    def expense(self, budget, amount, *, status=ExpenseStatus.APPROVED,
                expense_date=date(2024, 6, 1), category=None,
                description="Expense") -> ExpenseModel:
        return self._add(ExpenseModel(
            budget_id=budget.id,
            amount=Decimal(amount),
            status=ExpenseStatus(status).value,
            expense_date=expense_date,
            category=category,
            description=description,
            created_by_id=self.actor_id,
        ))

    def resource(self, name="Grace", *, type=ResourceType.HUMAN, role=None,
                 cost_per_hour=None) -> ResourceModel:
        return self._add(ResourceModel(
            name=name,
            type=ResourceType(type).value,
            role=role,
            cost_per_hour=cost_per_hour,
            created_by_id=self.actor_id,
        ))

    def allocation(self, resource, project, percentage, *, start_date=None, end_date=None,
                   task=None) -> ResourceAllocationModel:
        return self._add(ResourceAllocationModel(
            resource_id=resource.id,
            project_id=project.id,
            task_id=task.id if task is not None else None,
            allocation_percentage=Decimal(str(percentage)),
            start_date=start_date or NOW - timedelta(days=7),
            end_date=end_date or NOW + timedelta(days=7),
            created_by_id=self.actor_id,
        ))

    def activity(self, user, entity_id, occurred_at, *, action=ActivityAction.UPDATED,
                 entity_type=EntityType.TASK, details=None) -> ActivityLogModel:
        return self._add(ActivityLogModel(
            user_id=user.id,
            action=ActivityAction(action).value,
            entity_type=EntityType(entity_type).value,
            entity_id=entity_id,
            occurred_at=occurred_at,
            details=details,
            created_by_id=self.actor_id,
        ))


@pytest.fixture
def factory(session, test_actor_id) -> PulseFactory:
    """Row factory bound to the test session."""
    return PulseFactory(session, test_actor_id)
