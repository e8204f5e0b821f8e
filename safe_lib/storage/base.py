"""Storage backend interface definitions.

Defines the StorageBackend abstract class used by bindings to persist
serialized snapshots. A store is a flat key-value space of strings with a
finite capacity; it offers no atomicity and no transactions.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Base class for errors raised by storage backends."""


class QuotaExceededError(StorageError):
    """Raised by `set` when the write would exceed the store capacity."""

    def __init__(self, key: str, needed: int, quota: int) -> None:
        super().__init__(f"quota exceeded writing {key!r}: {needed} > {quota}")
        self.key = key
        self.needed = needed
        self.quota = quota


class StorageBackend(ABC):
    """Abstract key-value store.

    Values are strings. Implementations must leave the store unchanged when
    a `set` fails with `QuotaExceededError`.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value stored under `key`, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`.

        Raises `QuotaExceededError` when the store capacity would be exceeded.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove `key`. Removing an absent key is a no-op."""
