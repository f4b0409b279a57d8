"""
Expense Ledger.

Single source of truth for expense status.  Reads hand out snapshots;
the only way to change a stored expense is :meth:`ExpenseLedger.record_transition`.
"""

from __future__ import annotations

import uuid
from decimal import Decimal, InvalidOperation
from typing import Union

from expense_approval.exceptions import InvalidAmountError, NotFoundError
from expense_approval.logger import StructuredLogger
from expense_approval.models.enums import ExpenseStatus
from expense_approval.models.expense import Expense
from expense_approval.repositories.base_repository import BaseRepository
from expense_approval.repositories.employee_directory import EmployeeDirectory

Amount = Union[int, float, str, Decimal]


def to_amount(value: Amount) -> Decimal:
    """Convert *value* to a positive ``Decimal``.

    Floats go through ``str`` so ``0.1`` stays ``Decimal("0.1")``.

    Raises:
        InvalidAmountError: If *value* is not a finite number greater than zero.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Expense amount must be a number, got {value!r}")
    try:
        amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(
            f"Expense amount must be a number, got {value!r}", original_error=exc
        ) from exc
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError("Expense amount must be greater than 0")
    return amount


class ExpenseLedger(BaseRepository[str, Expense]):
    """Data access layer for Expense entities.

    **No ``delete()`` method.**  Terminal expenses stay in the ledger so
    their approval history remains available for audit.
    """

    def __init__(self, directory: EmployeeDirectory, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._directory = directory

    def create(self, amount: Amount, submitter_uid: int) -> str:
        """Insert a new ``SUBMITTED`` expense and return its id.

        Raises:
            InvalidAmountError: If *amount* is not greater than zero.
            InvalidSubmitterError: If *submitter_uid* is not an individual
                contributor.
        """
        value = to_amount(amount)
        self._directory.validate_submitter(submitter_uid)

        expense_id = str(uuid.uuid4())
        self._put(
            expense_id,
            Expense(id=expense_id, amount=value, submitter_uid=submitter_uid),
        )
        self._logger.debug("Expense %s stored for submitter %s", expense_id, submitter_uid)
        return expense_id

    def get(self, expense_id: str) -> Expense:
        """Return a snapshot of the expense.

        Mutating the returned object has no effect on the ledger.

        Raises:
            NotFoundError: If no expense has that id.
        """
        return self._require(expense_id).model_copy(deep=True)

    def record_transition(self, expense_id: str, new_status: ExpenseStatus) -> Expense:
        """Set the status and append it to the history, then return a snapshot."""
        expense = self._require(expense_id)
        expense.status = new_status
        expense.approval_history.append(new_status)
        return expense.model_copy(deep=True)

    def _require(self, expense_id: str) -> Expense:
        expense = self._find(expense_id)
        if expense is None:
            raise NotFoundError(f"Expense with id {expense_id} not found")
        return expense
