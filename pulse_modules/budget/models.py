"""
Budget Domain Models (``pulse_modules.budget.models``).

Invariants enforced
-------------------
* All monetary amounts are ``Decimal``, never ``float``.
* Only ``APPROVED`` expenses count as spent.  Pending and rejected expenses
  still appear in per-category breakdowns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID


class ExpenseStatus(str, Enum):
    """Expense approval states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Expense:
    """A single expense booked against a project budget."""
    id: UUID
    budget_id: UUID
    amount: Decimal
    expense_date: date
    status: ExpenseStatus = ExpenseStatus.PENDING
    category: str | None = None
    description: str = ""

    @property
    def is_approved(self) -> bool:
        return self.status == ExpenseStatus.APPROVED


@dataclass(frozen=True)
class Budget:
    """A project's budget with its expenses attached."""
    id: UUID
    project_id: UUID
    total_budget: Decimal
    currency: str = "USD"
    expenses: tuple[Expense, ...] = field(default_factory=tuple)
