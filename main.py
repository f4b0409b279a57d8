"""
Expense Approval Flow Entry Point.

Bootstraps the dependency graph via constructor injection: configuration,
the employee directory loaded from ``USERS_JSON_PATH`` and the approval
engine.  Every subsystem is wired here; no module-level globals.

Usage::

    APPROVAL_THRESHOLD=1000 USERS_JSON_PATH=users.json python main.py
"""

from __future__ import annotations

import sys

from expense_approval.config import get_config
from expense_approval.exceptions import ConfigError
from expense_approval.logger import StructuredLogger, get_logger
from expense_approval.services import create_services


def main() -> None:
    """Application entry point: wire dependencies and report readiness."""
    # ------------------------------------------------------------------
    # 1. Configuration (from .env / environment variables)
    # ------------------------------------------------------------------
    config = get_config()

    logger: StructuredLogger = get_logger("main")
    logger.info("Starting expense approval flow...")

    # ------------------------------------------------------------------
    # 2. Directory + engine (single composition root)
    # ------------------------------------------------------------------
    services = create_services(config=config)

    directory = services["employee_directory"]
    engine = services["approval_engine"]
    logger.info(
        "Approval engine ready",
        extra={
            "employees": len(directory),
            "threshold": str(engine.threshold),
            "policy": engine.policy.value,
        },
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        pass
    except ConfigError as exc:
        sys.stderr.write(f"FATAL: configuration error: {exc.message}\n")
        sys.exit(1)
