"""
Employee Directory.

Authoritative uid -> Employee mapping, read-only once constructed.
Construction validates the reporting hierarchy so that every later
lookup can assume a well-formed forest of chains ending in a
self-managed root.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from expense_approval.exceptions import (
    ConfigError,
    InvalidSubmitterError,
    NoFinanceExpertsError,
    NotFoundError,
)
from expense_approval.logger import StructuredLogger
from expense_approval.models.employee import Employee
from expense_approval.repositories.base_repository import BaseRepository


class EmployeeDirectory(BaseRepository[int, Employee]):
    """Data access layer for Employee entities.

    The directory is built once and never mutated afterwards.  Hierarchy
    rules enforced at construction:

    - uids are unique;
    - every ``manager_uid`` refers to an employee in the directory;
    - the only cycle allowed is a root managing itself.

    Raises:
        ConfigError: If any rule is violated.  Nothing is loaded in that case.
    """

    def __init__(self, employees: Iterable[Employee], logger: StructuredLogger) -> None:
        super().__init__(logger)
        for employee in employees:
            if employee.uid in self._items:
                raise ConfigError(f"Duplicate employee uid {employee.uid}")
            self._put(employee.uid, employee)
        self._validate_hierarchy()
        self._finance_experts: tuple[Employee, ...] = tuple(
            sorted(
                (emp for emp in self._items.values() if emp.is_finance_expert),
                key=lambda emp: emp.uid,
            )
        )
        self._logger.info(
            "Employee directory loaded: %d employees, %d finance experts",
            len(self._items),
            len(self._finance_experts),
        )

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, object]],
        logger: StructuredLogger,
    ) -> "EmployeeDirectory":
        """Build a directory from raw configuration records.

        Records use the configuration file keys (``uid``, ``email``,
        ``manager``, ``financeExpert``).  Any malformed record fails the
        whole load.
        """
        try:
            employees = [Employee.model_validate(record) for record in records]
        except ValidationError as exc:
            raise ConfigError(
                f"Employee configuration is invalid: {exc}", original_error=exc
            ) from exc
        return cls(employees, logger)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, uid: int) -> Employee:
        """Return the employee with *uid*.

        Raises:
            NotFoundError: If no employee has that uid.
        """
        employee = self._find(uid)
        if employee is None:
            raise NotFoundError(f"Employee uid {uid} not found")
        return employee

    def manager_of(self, uid: int) -> int:
        """Return the uid of the direct manager of *uid*."""
        return self.get(uid).manager_uid

    def finance_experts(self) -> tuple[Employee, ...]:
        """All finance experts, ascending by uid.

        Raises:
            NoFinanceExpertsError: If the directory has none.
        """
        if not self._finance_experts:
            raise NoFinanceExpertsError("No finance experts available")
        return self._finance_experts

    def employees(self) -> list[Employee]:
        """All employees, ascending by uid."""
        return sorted(self._items.values(), key=lambda emp: emp.uid)

    # ------------------------------------------------------------------
    # Submitter validation
    # ------------------------------------------------------------------

    def validate_submitter(self, uid: int) -> Employee:
        """Check that *uid* may submit expenses and return the employee.

        A submitter needs a distinct manager and a distinct senior manager
        above that: self-managed roots and direct reports of a root are
        refused.

        Raises:
            InvalidSubmitterError: If *uid* is unknown or not an
                individual contributor.
        """
        employee = self._find(uid)
        if employee is None:
            raise InvalidSubmitterError(f"Submitter uid {uid} not found")
        manager_uid = employee.manager_uid
        if manager_uid == uid:
            raise InvalidSubmitterError(
                f"Employee {uid} manages themselves and cannot submit expenses"
            )
        if manager_uid == self.manager_of(manager_uid):
            raise InvalidSubmitterError(
                f"Employee {uid} has no senior manager above manager {manager_uid}; "
                f"only employees can submit expenses"
            )
        return employee

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _validate_hierarchy(self) -> None:
        """Reject dangling manager references and multi-member cycles."""
        for employee in self._items.values():
            if employee.manager_uid not in self._items:
                raise ConfigError(
                    f"Manager uid {employee.manager_uid} of employee "
                    f"{employee.uid} not found"
                )

        # Chains already known to end in a root.
        terminated: set[int] = set()
        for uid in self._items:
            chain: list[int] = [uid]
            current = uid
            while current not in terminated:
                manager_uid = self._items[current].manager_uid
                if manager_uid == current:
                    break
                if manager_uid in chain:
                    cycle = " -> ".join(str(u) for u in chain[chain.index(manager_uid):])
                    raise ConfigError(
                        f"Management cycle detected: {cycle} -> {manager_uid}"
                    )
                chain.append(manager_uid)
                current = manager_uid
            terminated.update(chain)
