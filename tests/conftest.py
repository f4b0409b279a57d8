"""
Pytest Fixtures for Expense Approval Tests
"""
import io
import os
from pathlib import Path

import pytest

# Keep tests independent of any developer .env / shell settings
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ.pop("APPROVAL_THRESHOLD", None)
os.environ.pop("FINANCE_EXPERT_POLICY", None)

from expense_approval.config import reset_config
from expense_approval.logger import StructuredLogger
from expense_approval.models.enums import FinanceExpertPolicy
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.services.approval_engine import ApprovalEngine
from expense_approval.services.employee_loader import load_employee_directory
from tests.hierarchy import EMPLOYEE

INPUT_DIR = Path(__file__).parent / "input"


@pytest.fixture(autouse=True)
def _fresh_config():
    """Drop the cached settings so each test reads the environment anew."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def input_dir() -> Path:
    return INPUT_DIR


@pytest.fixture
def users_json_path() -> Path:
    return INPUT_DIR / "users.json"


@pytest.fixture
def logger(request) -> StructuredLogger:
    return StructuredLogger(
        name=f"expense_approval.tests.{request.node.name}",
        stream=io.StringIO(),
    )


@pytest.fixture
def directory(users_json_path, logger) -> EmployeeDirectory:
    return load_employee_directory(users_json_path, logger)


@pytest.fixture
def engine(directory, logger) -> ApprovalEngine:
    return ApprovalEngine(directory=directory, threshold=1000, logger=logger)


@pytest.fixture
def least_loaded_engine(directory, logger) -> ApprovalEngine:
    return ApprovalEngine(
        directory=directory,
        threshold=1000,
        logger=logger,
        policy=FinanceExpertPolicy.LEAST_LOADED,
    )


@pytest.fixture
def started_expense(engine) -> str:
    """A 500 expense of employee 1 waiting for their manager."""
    expense_id = engine.create_expense(500, EMPLOYEE)
    engine.start_approval(expense_id, EMPLOYEE)
    return expense_id
