"""
Repository Layer Package.

In-memory, key-indexed stores for employees and expenses.  Services never
touch the underlying dicts directly.

Usage:
    from expense_approval.repositories.employee_directory import EmployeeDirectory
    from expense_approval.repositories.expense_ledger import ExpenseLedger
"""

from expense_approval.repositories.base_repository import BaseRepository
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.repositories.expense_ledger import ExpenseLedger

__all__ = [
    "BaseRepository",
    "EmployeeDirectory",
    "ExpenseLedger",
]
