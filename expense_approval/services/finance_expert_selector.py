"""
Finance Expert Selector.

Least-loaded assignment of the finance-expert review stage.  Used only
under ``FinanceExpertPolicy.LEAST_LOADED``; under ``BROADCAST`` every
eligible expert may act and no assignment is tracked.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from expense_approval.exceptions import NoFinanceExpertsError
from expense_approval.logger import StructuredLogger
from expense_approval.services.base_service import BaseService


class FinanceExpertSelector(BaseService):
    """Tracks which finance expert owns which pending expense.

    Load is the number of expenses currently assigned to an expert and
    still awaiting their decision.  Ties go to the lowest uid so repeated
    selection under identical load is reproducible.
    """

    def __init__(self, logger: StructuredLogger) -> None:
        super().__init__(logger)
        self._assignee_by_expense: dict[str, int] = {}
        self._pending_by_expert: dict[int, set[str]] = {}

    def pending_count(self, uid: int) -> int:
        """Number of expenses currently assigned to *uid*."""
        return len(self._pending_by_expert.get(uid, ()))

    def choose(self, candidates: Iterable[int]) -> int:
        """Pick the least-loaded uid among *candidates* without assigning.

        Raises:
            NoFinanceExpertsError: If *candidates* is empty.
        """
        pool = list(candidates)
        if not pool:
            raise NoFinanceExpertsError("No finance expert available for assignment")
        return min(pool, key=lambda uid: (self.pending_count(uid), uid))

    def assign(self, expense_id: str, uid: int) -> None:
        """Record *uid* as the reviewer of *expense_id*."""
        self.release(expense_id)
        self._assignee_by_expense[expense_id] = uid
        self._pending_by_expert.setdefault(uid, set()).add(expense_id)
        self._logger.info(
            "Expense %s assigned to finance expert %s (load %d)",
            expense_id,
            uid,
            self.pending_count(uid),
        )

    def release(self, expense_id: str) -> Optional[int]:
        """Drop the assignment of *expense_id*, returning the former assignee."""
        uid = self._assignee_by_expense.pop(expense_id, None)
        if uid is not None:
            self._pending_by_expert[uid].discard(expense_id)
        return uid

    def assignee_of(self, expense_id: str) -> Optional[int]:
        return self._assignee_by_expense.get(expense_id)
