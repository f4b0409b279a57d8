"""
Unit Tests - Expense Ledger
"""
from decimal import Decimal

import pytest

from expense_approval.exceptions import (
    InvalidAmountError,
    InvalidSubmitterError,
    NotFoundError,
)
from expense_approval.models.enums import ExpenseStatus
from expense_approval.repositories.expense_ledger import ExpenseLedger, to_amount
from tests.hierarchy import EMPLOYEE, MANAGER, SENIOR_MANAGER, UNKNOWN_UID


@pytest.fixture
def ledger(directory, logger) -> ExpenseLedger:
    return ExpenseLedger(directory=directory, logger=logger)


class TestCreate:
    """Tests for expense creation"""

    @pytest.mark.unit
    def test_create_stores_submitted_expense(self, ledger):
        expense_id = ledger.create(500, EMPLOYEE)
        expense = ledger.get(expense_id)
        assert expense.id == expense_id
        assert expense.amount == Decimal("500")
        assert expense.submitter_uid == EMPLOYEE
        assert expense.status == ExpenseStatus.SUBMITTED
        assert expense.approval_history == [ExpenseStatus.SUBMITTED]

    @pytest.mark.unit
    def test_ids_are_unique(self, ledger):
        ids = {ledger.create(10, EMPLOYEE) for _ in range(20)}
        assert len(ids) == 20
        assert len(ledger) == 20

    @pytest.mark.unit
    @pytest.mark.parametrize("amount", [0, -100, Decimal("-0.01"), "0", "abc", None, True, float("nan"), float("inf")])
    def test_invalid_amount(self, ledger, amount):
        with pytest.raises(InvalidAmountError):
            ledger.create(amount, EMPLOYEE)
        assert len(ledger) == 0

    @pytest.mark.unit
    @pytest.mark.parametrize("uid", [MANAGER, SENIOR_MANAGER, UNKNOWN_UID])
    def test_invalid_submitter(self, ledger, uid):
        with pytest.raises(InvalidSubmitterError):
            ledger.create(500, uid)
        assert len(ledger) == 0


class TestReadsAndTransitions:
    """Tests for lookups and the single mutator"""

    @pytest.mark.unit
    def test_get_unknown_id(self, ledger):
        with pytest.raises(NotFoundError, match="Expense with id nonexistent-id not found"):
            ledger.get("nonexistent-id")

    @pytest.mark.unit
    def test_get_returns_snapshot(self, ledger):
        expense_id = ledger.create(500, EMPLOYEE)
        snapshot = ledger.get(expense_id)
        snapshot.status = ExpenseStatus.APPROVED
        snapshot.approval_history.append(ExpenseStatus.APPROVED)
        assert ledger.get(expense_id).status == ExpenseStatus.SUBMITTED
        assert ledger.get(expense_id).approval_history == [ExpenseStatus.SUBMITTED]

    @pytest.mark.unit
    def test_record_transition_appends_history(self, ledger):
        expense_id = ledger.create(500, EMPLOYEE)
        ledger.record_transition(expense_id, ExpenseStatus.PENDING_MANAGER)
        expense = ledger.record_transition(expense_id, ExpenseStatus.REJECTED_MANAGER)
        assert expense.status == ExpenseStatus.REJECTED_MANAGER
        assert expense.approval_history == [
            ExpenseStatus.SUBMITTED,
            ExpenseStatus.PENDING_MANAGER,
            ExpenseStatus.REJECTED_MANAGER,
        ]
        assert ledger.get(expense_id).approval_history[-1] == expense.status

    @pytest.mark.unit
    def test_record_transition_unknown_id(self, ledger):
        with pytest.raises(NotFoundError):
            ledger.record_transition("nonexistent-id", ExpenseStatus.PENDING_MANAGER)


class TestToAmount:
    """Tests for amount normalisation"""

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (500, Decimal("500")),
        (0.1, Decimal("0.1")),
        ("12.50", Decimal("12.50")),
        (Decimal("0.01"), Decimal("0.01")),
    ])
    def test_valid_amounts(self, value, expected):
        assert to_amount(value) == expected
