"""
Base Service Class.

Every service receives its ``StructuredLogger`` through the constructor;
this base class only standardizes where it is kept.
"""

from __future__ import annotations

from expense_approval.logger import StructuredLogger


class BaseService:
    """Base class for engine, routing and selection services."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger: StructuredLogger = logger
