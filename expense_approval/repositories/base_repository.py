"""
Base Repository.

Provides shared infrastructure for all repositories:
- Logger reference
- A key-indexed in-memory store (O(1) lookup by identifier)

State lives for the lifetime of the process only.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, Optional, TypeVar

from expense_approval.logger import StructuredLogger

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class BaseRepository(Generic[K, T]):
    """Base class for all repositories. Receives dependencies via __init__."""

    def __init__(self, logger: StructuredLogger) -> None:
        self._logger = logger
        self._items: dict[K, T] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def _find(self, key: K) -> Optional[T]:
        """Return the stored item for *key*, or ``None``."""
        return self._items.get(key)

    def _put(self, key: K, item: T) -> None:
        self._items[key] = item
