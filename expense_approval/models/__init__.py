from __future__ import annotations

"""
Data Models Package.

Re-exports all Pydantic models for short imports:
    from expense_approval.models import Employee, Expense, ExpenseStatus
"""

from expense_approval.models.enums import (
    TERMINAL_STATUSES,
    ExpenseStatus,
    FinanceExpertPolicy,
)
from expense_approval.models.employee import Employee, EmployeeRoster
from expense_approval.models.expense import Expense

__all__ = [
    "TERMINAL_STATUSES",
    "ExpenseStatus",
    "FinanceExpertPolicy",
    "Employee",
    "EmployeeRoster",
    "Expense",
]
