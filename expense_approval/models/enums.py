"""
Shared Enumerations for Expense Approval Models.

StrEnum values compare equal to their string equivalents, so
``status == "APPROVED"`` works as well as ``status == ExpenseStatus.APPROVED``.
"""

from __future__ import annotations
from enum import StrEnum


class ExpenseStatus(StrEnum):
    """Expense approval workflow states.

    ``SUBMITTED`` is the initial state.  ``APPROVED`` and every
    ``REJECTED_*`` value are terminal: expenses are never deleted, they
    stay in their terminal state for audit.
    """

    SUBMITTED = "SUBMITTED"
    PENDING_MANAGER = "PENDING_MANAGER"
    PENDING_SENIOR_MANAGER = "PENDING_SENIOR_MANAGER"
    PENDING_FINANCE_EXPERT = "PENDING_FINANCE_EXPERT"
    APPROVED = "APPROVED"
    REJECTED_MANAGER = "REJECTED_MANAGER"
    REJECTED_SENIOR_MANAGER = "REJECTED_SENIOR_MANAGER"
    REJECTED_FINANCE_EXPERT = "REJECTED_FINANCE_EXPERT"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


class FinanceExpertPolicy(StrEnum):
    """How the finance-expert stage is authorized.

    ``BROADCAST`` offers the expense to every eligible finance expert and
    the first one to act wins.  ``LEAST_LOADED`` assigns it to the single
    eligible expert with the fewest pending assignments.
    """

    BROADCAST = "BROADCAST"
    LEAST_LOADED = "LEAST_LOADED"


TERMINAL_STATUSES: frozenset[ExpenseStatus] = frozenset({
    ExpenseStatus.APPROVED,
    ExpenseStatus.REJECTED_MANAGER,
    ExpenseStatus.REJECTED_SENIOR_MANAGER,
    ExpenseStatus.REJECTED_FINANCE_EXPERT,
})
