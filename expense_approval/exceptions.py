"""
Approval Flow Exceptions.

Every failure the core can report is a subclass of
:class:`ApprovalFlowError`.  Errors are raised synchronously and never
retried internally; validation always runs before any state is written,
so a raised error means nothing changed.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ApprovalFlowError",
    "ConfigError",
    "InvalidAmountError",
    "InvalidStateError",
    "InvalidSubmitterError",
    "NoFinanceExpertsError",
    "NotFoundError",
    "NotStartedError",
    "UnauthorizedError",
]


class ApprovalFlowError(Exception):
    """Base exception for approval flow failures."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        self.message: str = message
        self.original_error: Optional[Exception] = original_error
        super().__init__(self.message)


class NotFoundError(ApprovalFlowError):
    """A referenced expense, employee, manager or finance expert does not exist."""


class InvalidAmountError(ApprovalFlowError):
    """Expense amount is zero or negative."""


class InvalidSubmitterError(ApprovalFlowError):
    """Submitter is not a valid individual contributor for this expense."""


class UnauthorizedError(ApprovalFlowError):
    """Caller is not among the currently authorized approvers."""


class InvalidStateError(ApprovalFlowError):
    """Operation is not allowed in the expense's current status."""


class NotStartedError(InvalidStateError):
    """Routing was queried for an expense still in ``SUBMITTED``."""


class NoFinanceExpertsError(ApprovalFlowError):
    """No finance expert is available to review an expense."""


class ConfigError(ApprovalFlowError):
    """Employee or threshold configuration is malformed."""
