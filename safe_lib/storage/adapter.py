"""Storage scopes and the adapter that maps a scope to a concrete store."""
from __future__ import annotations
from enum import Enum
from typing import Union

from .interfaces import StorageProtocol


class StorageScope(str, Enum):
    LOCAL = "local"
    SESSION = "session"

    @classmethod
    def parse(cls, value: Union["StorageScope", str, None]) -> "StorageScope":
        """Accept a scope, its string value (any case) or None for LOCAL."""
        if value is None:
            return cls.LOCAL
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown storage scope {value!r}") from None


class StorageAdapter:
    """Uniform access to the local and session stores.

    The adapter is injected into every binding instead of being looked up
    globally, so tests can substitute in-memory stores for both scopes.
    """

    def __init__(self, local: StorageProtocol, session: StorageProtocol) -> None:
        self.local = local
        self.session = session

    def resolve(self, scope: Union[StorageScope, str, None]) -> StorageProtocol:
        if StorageScope.parse(scope) is StorageScope.SESSION:
            return self.session
        return self.local
