"""
SQLAlchemy ORM persistence models for the Budget module.

Invariants enforced
-------------------
* One budget per project (``project_id`` unique).
* Monetary fields use Numeric(38, 9) via the kernel type map.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse_kernel.db.base import TrackedBase


class BudgetModel(TrackedBase):
    """
    The budget envelope of a project.

    Maps to the ``Budget`` DTO in ``pulse_modules.budget.models``.
    """

    __tablename__ = "budgets"

    __table_args__ = (
        UniqueConstraint("project_id", name="uq_budget_project"),
    )

    project_id: Mapped[UUID] = mapped_column(ForeignKey("projects.id"), nullable=False)
    total_budget: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    # Relationships
    expenses: Mapped[list["ExpenseModel"]] = relationship(
        "ExpenseModel",
        back_populates="budget",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def to_dto(self):
        from pulse_modules.budget.models import Budget

        return Budget(
            id=self.id,
            project_id=self.project_id,
            total_budget=self.total_budget,
            currency=self.currency,
            expenses=tuple(e.to_dto() for e in self.expenses),
        )

    def __repr__(self) -> str:
        return f"<BudgetModel project={self.project_id} {self.total_budget} {self.currency}>"


class ExpenseModel(TrackedBase):
    """An expense booked against a budget."""

    __tablename__ = "expenses"

    __table_args__ = (
        Index("idx_expense_budget", "budget_id"),
        Index("idx_expense_status", "status"),
    )

    budget_id: Mapped[UUID] = mapped_column(ForeignKey("budgets.id"), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    expense_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Relationships
    budget: Mapped["BudgetModel"] = relationship(
        "BudgetModel",
        back_populates="expenses",
    )

    def to_dto(self):
        from pulse_modules.budget.models import Expense, ExpenseStatus

        return Expense(
            id=self.id,
            budget_id=self.budget_id,
            amount=self.amount,
            expense_date=self.expense_date,
            status=ExpenseStatus(self.status),
            category=self.category,
            description=self.description,
        )

    def __repr__(self) -> str:
        return f"<ExpenseModel {self.amount} [{self.status}]>"
