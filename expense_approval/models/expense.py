"""
Expense Model.

An expense is created in ``SUBMITTED`` and only ever moves forward.  Its
``approval_history`` is append-only and always ends with the current
``status``.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, PositiveInt

from expense_approval.models.enums import ExpenseStatus


class Expense(BaseModel):
    """Represents a submitted expense and its approval trail."""

    id: str
    amount: Decimal = Field(gt=0)
    submitter_uid: PositiveInt
    status: ExpenseStatus = ExpenseStatus.SUBMITTED
    approval_history: list[ExpenseStatus] = Field(
        default_factory=lambda: [ExpenseStatus.SUBMITTED]
    )

    def flow(self) -> str:
        """History rendered as ``"SUBMITTED -> PENDING_MANAGER -> ..."``."""
        return " -> ".join(status.value for status in self.approval_history)
