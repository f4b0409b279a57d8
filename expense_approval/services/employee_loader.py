"""
Employee Configuration Loader.

Reads the employee configuration file and builds a validated
:class:`EmployeeDirectory`.  Loading is all-or-nothing: any unreadable
file, malformed JSON, schema violation or hierarchy error raises
:class:`ConfigError` and nothing is returned.

Expected file shape::

    {
      "Employees": [
        {"uid": 1, "email": "jof@example.com", "manager": 2},
        {"uid": 6, "email": "sergey@example.com", "manager": 7, "financeExpert": true}
      ]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from expense_approval.exceptions import ConfigError
from expense_approval.logger import StructuredLogger
from expense_approval.models.employee import EmployeeRoster
from expense_approval.repositories.employee_directory import EmployeeDirectory


def parse_employee_roster(raw: Union[str, bytes]) -> EmployeeRoster:
    """Validate the JSON text of an employee configuration file.

    Raises:
        ConfigError: If the text is not valid JSON or does not match the schema.
    """
    try:
        return EmployeeRoster.model_validate(json.loads(raw))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(
            f"Employee configuration is not valid JSON: {exc}", original_error=exc
        ) from exc
    except ValidationError as exc:
        raise ConfigError(
            f"Input with employees is incorrect: {exc}", original_error=exc
        ) from exc


def load_employee_directory(
    path: Union[str, Path],
    logger: StructuredLogger,
) -> EmployeeDirectory:
    """Read *path* and return a ready-to-use :class:`EmployeeDirectory`.

    Raises:
        ConfigError: If the file cannot be read or its content is invalid.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(
            f"Cannot read employee configuration '{file_path}': {exc}",
            original_error=exc,
        ) from exc

    roster = parse_employee_roster(raw)
    logger.info("Loaded %d employee records from %s", len(roster.employees), file_path)
    return EmployeeDirectory(roster.employees, logger)
