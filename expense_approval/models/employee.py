"""
Employee Models.

``Employee`` is an immutable record loaded once from the employee
configuration file.  Field aliases follow the file's camelCase keys
(``manager``, ``financeExpert``) while Python code uses snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class Employee(BaseModel):
    """A single employee and their position in the reporting hierarchy.

    ``manager_uid`` points at the direct manager.  The top of a chain
    manages itself (``manager_uid == uid``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    uid: PositiveInt
    email: str
    manager_uid: PositiveInt = Field(alias="manager")
    is_finance_expert: bool = Field(default=False, alias="financeExpert")

    @property
    def is_root(self) -> bool:
        """``True`` for an employee at the top of its reporting chain."""
        return self.manager_uid == self.uid


class EmployeeRoster(BaseModel):
    """Top-level shape of the employee configuration file.

    Example::

        {"Employees": [{"uid": 1, "email": "a@example.com", "manager": 2}]}
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    employees: list[Employee] = Field(alias="Employees")
