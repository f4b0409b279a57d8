"""
Application Configuration.

Pydantic Settings model for the expense approval flow.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal
from typing import Optional

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_approval.exceptions import ConfigError
from expense_approval.models.enums import FinanceExpertPolicy


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Approval routing ---
    # Amounts strictly above the threshold need senior manager review.
    APPROVAL_THRESHOLD: Decimal = Field(default=Decimal("1000"), ge=0)
    FINANCE_EXPERT_POLICY: FinanceExpertPolicy = FinanceExpertPolicy.BROADCAST

    # --- Employee configuration ---
    USERS_JSON_PATH: str = "users.json"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # empty: console only
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @model_validator(mode="after")
    def _check_log_level(self) -> "AppConfig":
        """Reject log levels the ``logging`` module does not know."""
        level = self.LOG_LEVEL.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL '{self.LOG_LEVEL}'")
        self.LOG_LEVEL = level
        return self

    @property
    def log_level(self) -> int:
        """``LOG_LEVEL`` as a ``logging`` integer constant."""
        return logging.getLevelName(self.LOG_LEVEL)


def load_config(**overrides: object) -> AppConfig:
    """Build a fresh ``AppConfig``, surfacing validation failures as ``ConfigError``.

    Keyword *overrides* take precedence over the environment, which makes
    this the entry point for tests and for callers that configure the
    engine programmatically.
    """
    try:
        return AppConfig(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}", original_error=exc) from exc


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    On first call, creates an ``AppConfig`` instance (reading from ``.env``).
    Subsequent calls return the same instance.  Uses a check-lock-check
    pattern to avoid the lock overhead on the fast path while remaining
    thread-safe during first initialisation.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = load_config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next ``get_config()`` re-reads the environment."""
    global _config_instance
    with _config_lock:
        _config_instance = None
