"""
Unit Tests - Routing Resolver
"""
from decimal import Decimal

import pytest

from expense_approval.exceptions import NoFinanceExpertsError, NotStartedError
from expense_approval.models.enums import TERMINAL_STATUSES, ExpenseStatus
from expense_approval.models.expense import Expense
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.services.finance_expert_selector import FinanceExpertSelector
from expense_approval.services.routing import RoutingResolver
from tests.hierarchy import (
    EMPLOYEE,
    FINANCE_EXPERTS,
    FINANCE_SUBMITTER,
    MANAGER,
    SENIOR_MANAGER,
)


def _expense(status, submitter_uid=EMPLOYEE, expense_id="exp-1"):
    return Expense(
        id=expense_id,
        amount=Decimal("500"),
        submitter_uid=submitter_uid,
        status=status,
    )


@pytest.fixture
def resolver(directory, logger) -> RoutingResolver:
    return RoutingResolver(directory=directory, logger=logger)


class TestRuleTable:
    """Tests for status -> authorized approvers"""

    @pytest.mark.unit
    def test_submitted_not_started(self, resolver):
        with pytest.raises(NotStartedError, match="Start the approval process first"):
            resolver.authorized_approvers(_expense(ExpenseStatus.SUBMITTED))

    @pytest.mark.unit
    def test_pending_manager(self, resolver):
        assert resolver.authorized_approvers(_expense(ExpenseStatus.PENDING_MANAGER)) == (MANAGER,)

    @pytest.mark.unit
    def test_pending_senior_manager(self, resolver):
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_SENIOR_MANAGER)
        ) == (SENIOR_MANAGER,)

    @pytest.mark.unit
    def test_pending_finance_expert_broadcast(self, resolver):
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_FINANCE_EXPERT)
        ) == FINANCE_EXPERTS

    @pytest.mark.unit
    @pytest.mark.parametrize("status", sorted(TERMINAL_STATUSES))
    def test_terminal_is_empty(self, resolver, status):
        assert resolver.authorized_approvers(_expense(status)) == ()

    @pytest.mark.unit
    def test_finance_submitter_chain(self, resolver):
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_MANAGER, FINANCE_SUBMITTER)
        ) == (6,)
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_SENIOR_MANAGER, FINANCE_SUBMITTER)
        ) == (7,)


class TestFinanceExpertPool:
    """Tests for self-review exclusion and empty pools"""

    @pytest.mark.unit
    def test_self_review_excluded(self, resolver):
        approvers = resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_FINANCE_EXPERT, FINANCE_SUBMITTER)
        )
        assert FINANCE_SUBMITTER not in approvers
        assert approvers == (6, 7)

    @pytest.mark.unit
    def test_no_finance_experts(self, logger):
        directory = EmployeeDirectory.from_records(
            [
                {"uid": 1, "email": "a@example.com", "manager": 2},
                {"uid": 2, "email": "b@example.com", "manager": 3},
                {"uid": 3, "email": "c@example.com", "manager": 3},
            ],
            logger,
        )
        resolver = RoutingResolver(directory=directory, logger=logger)
        with pytest.raises(NoFinanceExpertsError):
            resolver.authorized_approvers(_expense(ExpenseStatus.PENDING_FINANCE_EXPERT, 1))

    @pytest.mark.unit
    def test_submitter_is_only_finance_expert(self, logger):
        directory = EmployeeDirectory.from_records(
            [
                {"uid": 1, "email": "a@example.com", "manager": 2, "financeExpert": True},
                {"uid": 2, "email": "b@example.com", "manager": 3},
                {"uid": 3, "email": "c@example.com", "manager": 3},
            ],
            logger,
        )
        resolver = RoutingResolver(directory=directory, logger=logger)
        with pytest.raises(NoFinanceExpertsError, match="other than submitter 1"):
            resolver.finance_expert_candidates(1)


class TestAssignedFinanceExpert:
    """Tests for routing with a load-balancing selector"""

    @pytest.mark.unit
    def test_only_assignee_authorized(self, directory, logger):
        selector = FinanceExpertSelector(logger=logger)
        resolver = RoutingResolver(directory=directory, logger=logger, selector=selector)
        selector.assign("exp-1", 7)
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_FINANCE_EXPERT)
        ) == (7,)

    @pytest.mark.unit
    def test_unassigned_expense_has_nobody(self, directory, logger):
        selector = FinanceExpertSelector(logger=logger)
        resolver = RoutingResolver(directory=directory, logger=logger, selector=selector)
        assert resolver.authorized_approvers(
            _expense(ExpenseStatus.PENDING_FINANCE_EXPERT)
        ) == ()
