"""
Routing Resolver.

Computes who may approve or reject an expense right now.  The answer is
derived on every call from the expense status, the submitter and the
employee hierarchy; nothing about authorization is cached on the expense.

| Status                   | Authorized approvers                         |
|--------------------------|----------------------------------------------|
| SUBMITTED                | none, raises ``NotStartedError``             |
| PENDING_MANAGER          | manager of the submitter                     |
| PENDING_SENIOR_MANAGER   | manager of the submitter's manager           |
| PENDING_FINANCE_EXPERT   | finance experts other than the submitter     |
| terminal                 | nobody                                       |
"""

from __future__ import annotations

from typing import Optional

from expense_approval.exceptions import NoFinanceExpertsError, NotStartedError
from expense_approval.logger import StructuredLogger
from expense_approval.models.enums import ExpenseStatus
from expense_approval.models.expense import Expense
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.services.base_service import BaseService
from expense_approval.services.finance_expert_selector import FinanceExpertSelector


class RoutingResolver(BaseService):
    """Read-only routing queries against the employee directory.

    When a :class:`FinanceExpertSelector` is supplied, the finance stage is
    restricted to the expert it assigned instead of the whole pool.
    """

    def __init__(
        self,
        directory: EmployeeDirectory,
        logger: StructuredLogger,
        selector: Optional[FinanceExpertSelector] = None,
    ) -> None:
        super().__init__(logger)
        self._directory = directory
        self._selector = selector

    def manager_uid(self, submitter_uid: int) -> int:
        """Uid of the submitter's direct manager."""
        return self._directory.manager_of(submitter_uid)

    def senior_manager_uid(self, submitter_uid: int) -> int:
        """Uid of the manager one level above the submitter's manager."""
        return self._directory.manager_of(self._directory.manager_of(submitter_uid))

    def finance_expert_candidates(self, submitter_uid: int) -> tuple[int, ...]:
        """Finance experts eligible to review an expense of *submitter_uid*.

        Self-review is excluded.

        Raises:
            NoFinanceExpertsError: If the pool is empty, or holds only the
                submitter.
        """
        candidates = tuple(
            expert.uid
            for expert in self._directory.finance_experts()
            if expert.uid != submitter_uid
        )
        if not candidates:
            raise NoFinanceExpertsError(
                f"No finance expert other than submitter {submitter_uid} available"
            )
        return candidates

    def authorized_approvers(self, expense: Expense) -> tuple[int, ...]:
        """Uids allowed to act on *expense* in its current status, ascending.

        Raises:
            NotStartedError: If the expense is still ``SUBMITTED``.
            NoFinanceExpertsError: If the finance stage has nobody eligible.
        """
        status = expense.status
        if status == ExpenseStatus.SUBMITTED:
            raise NotStartedError(
                "No next approver found. Start the approval process first"
            )
        if status == ExpenseStatus.PENDING_MANAGER:
            return (self.manager_uid(expense.submitter_uid),)
        if status == ExpenseStatus.PENDING_SENIOR_MANAGER:
            return (self.senior_manager_uid(expense.submitter_uid),)
        if status == ExpenseStatus.PENDING_FINANCE_EXPERT:
            if self._selector is None:
                return self.finance_expert_candidates(expense.submitter_uid)
            assignee = self._selector.assignee_of(expense.id)
            return (assignee,) if assignee is not None else ()
        return ()
