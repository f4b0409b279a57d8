"""
Business Logic Services Package.

The ``create_services()`` factory wires the employee directory and the
approval engine together, returning a typed dict that the entry point
can consume without knowing the internal dependency graph.
"""

from __future__ import annotations

from typing import Optional, TypedDict

from expense_approval.config import AppConfig
from expense_approval.logger import get_logger
from expense_approval.repositories.employee_directory import EmployeeDirectory
from expense_approval.services.approval_engine import ApprovalEngine
from expense_approval.services.employee_loader import load_employee_directory


class ServiceContainer(TypedDict):
    """Typed container for all application services."""

    employee_directory: EmployeeDirectory
    approval_engine: ApprovalEngine


def create_services(
    config: AppConfig,
    directory: Optional[EmployeeDirectory] = None,
) -> ServiceContainer:
    """
    Wire the directory and the engine together.

    This is the single composition root for the service layer.  The
    entry point calls this once at startup.

    Args:
        config: Application configuration (threshold, policy, users file).
        directory: Pre-built directory.  When omitted, the directory is
            loaded from ``config.USERS_JSON_PATH``.

    Returns:
        ServiceContainer mapping service names to fully-wired instances.

    Raises:
        ConfigError: If the employee file or the threshold is invalid.
    """
    logger = get_logger("expense_approval")

    if directory is None:
        directory = load_employee_directory(
            config.USERS_JSON_PATH, logger=logger.child("directory")
        )

    approval_engine = ApprovalEngine(
        directory=directory,
        threshold=config.APPROVAL_THRESHOLD,
        policy=config.FINANCE_EXPERT_POLICY,
        logger=logger.child("engine"),
    )

    return ServiceContainer(
        employee_directory=directory,
        approval_engine=approval_engine,
    )
