"""
Expense Status Transitions.

Pure functions computing the status an expense moves to after an approval
or a rejection.  Authorization is not checked here; see
:mod:`expense_approval.services.routing`.
"""

from __future__ import annotations

from decimal import Decimal

from expense_approval.exceptions import InvalidStateError
from expense_approval.models.enums import ExpenseStatus

_REJECTIONS: dict[ExpenseStatus, ExpenseStatus] = {
    ExpenseStatus.PENDING_MANAGER: ExpenseStatus.REJECTED_MANAGER,
    ExpenseStatus.PENDING_SENIOR_MANAGER: ExpenseStatus.REJECTED_SENIOR_MANAGER,
    ExpenseStatus.PENDING_FINANCE_EXPERT: ExpenseStatus.REJECTED_FINANCE_EXPERT,
}


def requires_senior_review(amount: Decimal, threshold: Decimal) -> bool:
    """``True`` when *amount* is strictly above *threshold*."""
    return amount > threshold


def next_approval_status(
    status: ExpenseStatus,
    amount: Decimal,
    threshold: Decimal,
) -> ExpenseStatus:
    """Status after an approval in *status*.

    The amount is compared against the threshold only at the manager
    stage.  An amount equal to the threshold skips senior manager review.

    Raises:
        InvalidStateError: If *status* is ``SUBMITTED`` or terminal.
    """
    if status == ExpenseStatus.PENDING_MANAGER:
        if requires_senior_review(amount, threshold):
            return ExpenseStatus.PENDING_SENIOR_MANAGER
        return ExpenseStatus.PENDING_FINANCE_EXPERT
    if status == ExpenseStatus.PENDING_SENIOR_MANAGER:
        return ExpenseStatus.PENDING_FINANCE_EXPERT
    if status == ExpenseStatus.PENDING_FINANCE_EXPERT:
        return ExpenseStatus.APPROVED
    raise InvalidStateError(
        f"Expense in status {status} is not in a valid state for approval"
    )


def next_rejection_status(status: ExpenseStatus) -> ExpenseStatus:
    """Status after a rejection in *status*.

    Raises:
        InvalidStateError: If *status* is ``SUBMITTED`` or terminal.
    """
    try:
        return _REJECTIONS[status]
    except KeyError:
        raise InvalidStateError(
            f"Expense in status {status} is not in a valid state for rejection"
        ) from None
