"""Budget Module (``pulse_modules.budget``)."""

from pulse_modules.budget.models import Budget, Expense, ExpenseStatus

__all__ = [
    "Budget",
    "Expense",
    "ExpenseStatus",
]
