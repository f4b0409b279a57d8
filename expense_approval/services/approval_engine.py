"""
Approval Engine Service.

Owns every expense state transition: submission, start of the approval
process, approval and rejection.  It is the only component that writes to
the :class:`ExpenseLedger`.

Each public operation validates first and writes last, so a raised
:class:`~expense_approval.exceptions.ApprovalFlowError` leaves the ledger
untouched.  The engine performs no locking: callers that share an engine
across threads must serialize operations per expense id.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from expense_approval.exceptions import (
    ConfigError,
    InvalidStateError,
    InvalidSubmitterError,
    UnauthorizedError,
)
from expense_approval.logger import StructuredLogger
from expense_approval.models.enums import ExpenseStatus, FinanceExpertPolicy
from expense_approval.models.expense import Expense
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.repositories.expense_ledger import Amount, ExpenseLedger
from expense_approval.services.base_service import BaseService
from expense_approval.services.finance_expert_selector import FinanceExpertSelector
from expense_approval.services.routing import RoutingResolver
from expense_approval.services.transitions import (
    next_approval_status,
    next_rejection_status,
)
from expense_approval.utils.audit import log_audit_event


def _validate_threshold(threshold: Union[int, float, str, Decimal]) -> Decimal:
    if isinstance(threshold, bool):
        raise ConfigError(f"Threshold must be a number, got {threshold!r}")
    try:
        value = Decimal(str(threshold)) if isinstance(threshold, float) else Decimal(threshold)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ConfigError(
            f"Threshold must be a number, got {threshold!r}", original_error=exc
        ) from exc
    if not value.is_finite() or value < 0:
        raise ConfigError("Threshold must be a positive number or zero")
    return value


class ApprovalEngine(BaseService):
    """
    Service handling the expense approval state machine.

    ``SUBMITTED -> PENDING_MANAGER -> [PENDING_SENIOR_MANAGER ->]
    PENDING_FINANCE_EXPERT -> APPROVED``, with a rejection from each
    pending stage to the matching ``REJECTED_*`` state.

    Dependencies are injected via __init__; the ledger, resolver and
    selector are owned by the engine.
    """

    def __init__(
        self,
        directory: EmployeeDirectory,
        threshold: Union[int, float, str, Decimal],
        logger: StructuredLogger,
        policy: Union[FinanceExpertPolicy, str] = FinanceExpertPolicy.BROADCAST,
    ) -> None:
        super().__init__(logger)
        self._threshold: Decimal = _validate_threshold(threshold)
        try:
            self._policy = FinanceExpertPolicy(policy)
        except ValueError as exc:
            raise ConfigError(
                f"Unknown finance expert policy '{policy}'", original_error=exc
            ) from exc

        self._directory = directory
        self._ledger = ExpenseLedger(directory=directory, logger=logger)
        self._selector: Optional[FinanceExpertSelector] = (
            FinanceExpertSelector(logger=logger)
            if self._policy == FinanceExpertPolicy.LEAST_LOADED
            else None
        )
        self._resolver = RoutingResolver(
            directory=directory, logger=logger, selector=self._selector
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def threshold(self) -> Decimal:
        return self._threshold

    @property
    def policy(self) -> FinanceExpertPolicy:
        return self._policy

    @property
    def selector(self) -> Optional[FinanceExpertSelector]:
        """The load-balancing selector, or ``None`` under ``BROADCAST``."""
        return self._selector

    # ------------------------------------------------------------------
    # Public: submission
    # ------------------------------------------------------------------

    def create_expense(self, amount: Amount, submitter_uid: int) -> str:
        """Submit a new expense and return its id.

        Raises:
            InvalidAmountError: If *amount* is not greater than zero.
            InvalidSubmitterError: If *submitter_uid* is unknown or not an
                individual contributor.
        """
        expense_id = self._ledger.create(amount, submitter_uid)
        expense = self._ledger.get(expense_id)
        log_audit_event(
            logger=self._logger,
            action="CREATE",
            entity_type="Expense",
            entity_id=expense_id,
            user_id=submitter_uid,
            details={
                "amount": str(expense.amount),
                "to_status": expense.status.value,
            },
        )
        return expense_id

    def start_approval(self, expense_id: str, submitter_uid: int) -> ExpenseStatus:
        """Move a ``SUBMITTED`` expense to ``PENDING_MANAGER``.

        Raises:
            NotFoundError: If the expense or the submitter does not exist.
            InvalidSubmitterError: If the submitter is not an individual
                contributor, or does not own the expense.
            InvalidStateError: If the approval process already started.
        """
        expense = self._ledger.get(expense_id)
        self._directory.get(submitter_uid)
        self._directory.validate_submitter(submitter_uid)

        if expense.submitter_uid != submitter_uid:
            raise InvalidSubmitterError(
                f"Employee {submitter_uid} did not submit expense {expense_id}"
            )
        if expense.status != ExpenseStatus.SUBMITTED:
            raise InvalidStateError(
                f"Approval of expense {expense_id} already started "
                f"(status {expense.status})"
            )

        return self._transition(
            expense,
            ExpenseStatus.PENDING_MANAGER,
            action="START",
            actor_uid=submitter_uid,
        )

    # ------------------------------------------------------------------
    # Public: decisions
    # ------------------------------------------------------------------

    def approve(self, expense_id: str, approver_uid: int) -> ExpenseStatus:
        """Approve the expense at its current stage and return the new status.

        Raises:
            NotFoundError: If the expense does not exist.
            InvalidStateError: If the expense is ``SUBMITTED`` or terminal.
            UnauthorizedError: If *approver_uid* may not act at this stage.
            NoFinanceExpertsError: If the expense would reach the finance stage
                with no eligible reviewer.
        """
        expense = self._authorize(expense_id, approver_uid, verb="approve")
        new_status = next_approval_status(expense.status, expense.amount, self._threshold)
        return self._transition(
            expense, new_status, action="APPROVE", actor_uid=approver_uid
        )

    def reject(self, expense_id: str, approver_uid: int) -> ExpenseStatus:
        """Reject the expense at its current stage and return the new status.

        Raises:
            NotFoundError: If the expense does not exist.
            InvalidStateError: If the expense is ``SUBMITTED`` or terminal.
            UnauthorizedError: If *approver_uid* may not act at this stage.
        """
        expense = self._authorize(expense_id, approver_uid, verb="reject")
        new_status = next_rejection_status(expense.status)
        return self._transition(
            expense, new_status, action="REJECT", actor_uid=approver_uid
        )

    # ------------------------------------------------------------------
    # Public: queries
    # ------------------------------------------------------------------

    def next_approvers(self, expense_id: str) -> tuple[int, ...]:
        """Uids currently allowed to approve or reject the expense.

        Empty once the expense is terminal.

        Raises:
            NotFoundError: If the expense does not exist.
            NotStartedError: If the expense is still ``SUBMITTED``.
        """
        return self._resolver.authorized_approvers(self._ledger.get(expense_id))

    def get_expense(self, expense_id: str) -> Expense:
        """Read-only snapshot of the expense."""
        return self._ledger.get(expense_id)

    def history(self, expense_id: str) -> tuple[ExpenseStatus, ...]:
        """Every status the expense has held, earliest first."""
        return tuple(self._ledger.get(expense_id).approval_history)

    def dump_flow(self, expense_id: str) -> str:
        """Log and return the human-readable approval flow of the expense."""
        expense = self._ledger.get(expense_id)
        line = f"Current flow for expense {expense_id}: {expense.flow()}"
        self._logger.info("%s", line)
        return line

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _authorize(self, expense_id: str, approver_uid: int, verb: str) -> Expense:
        """Load the expense and check that *approver_uid* may act on it now."""
        expense = self._ledger.get(expense_id)
        if expense.status.is_terminal:
            raise InvalidStateError(
                f"Expense {expense_id} is in status {expense.status} "
                f"and cannot be {verb}d"
            )

        authorized = self._resolver.authorized_approvers(expense)
        if approver_uid not in authorized:
            self._logger.warning(
                "Refused %s of expense %s by %s (authorized: %s)",
                verb,
                expense_id,
                approver_uid,
                list(authorized),
            )
            raise UnauthorizedError(
                f"Approver {approver_uid} is not authorised to {verb} "
                f"expense {expense_id}"
            )
        return expense

    def _transition(
        self,
        expense: Expense,
        new_status: ExpenseStatus,
        action: str,
        actor_uid: int,
    ) -> ExpenseStatus:
        """Write *new_status* to the ledger and keep assignments in step."""
        assignee: Optional[int] = None
        if new_status == ExpenseStatus.PENDING_FINANCE_EXPERT:
            # Nobody may enter the finance stage without someone to review it.
            candidates = self._resolver.finance_expert_candidates(expense.submitter_uid)
            if self._selector is not None:
                assignee = self._selector.choose(candidates)

        self._ledger.record_transition(expense.id, new_status)

        if self._selector is not None:
            if expense.status == ExpenseStatus.PENDING_FINANCE_EXPERT:
                self._selector.release(expense.id)
            if assignee is not None:
                self._selector.assign(expense.id, assignee)

        self._logger.info(
            "Expense %s moved %s -> %s by %s",
            expense.id,
            expense.status,
            new_status,
            actor_uid,
        )
        log_audit_event(
            logger=self._logger,
            action=action,
            entity_type="Expense",
            entity_id=expense.id,
            user_id=actor_uid,
            details={
                "from_status": expense.status.value,
                "to_status": new_status.value,
                "assigned_to": assignee,
            },
        )
        return new_status
