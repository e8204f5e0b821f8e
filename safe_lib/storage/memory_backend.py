"""Simple memory-backed storage backend

This backend stores strings in a dict for the lifetime of the process and
backs the session scope. Usage is counted like browser web storage: the
length of every key plus the length of its value.
"""
from threading import RLock
from typing import Dict, Iterable, Optional

from .base import QuotaExceededError, StorageBackend


class MemoryStorage(StorageBackend):
    def __init__(self, quota_bytes: Optional[int] = None):
        self._lock = RLock()
        self._store: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._store.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            if self.quota_bytes is not None:
                current = self._store.get(key)
                used = self.usage()
                if current is not None:
                    used -= len(key) + len(current)
                needed = used + len(key) + len(value)
                if needed > self.quota_bytes:
                    raise QuotaExceededError(key, needed, self.quota_bytes)
            self._store[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._store.keys())

    def usage(self) -> int:
        with self._lock:
            return sum(len(k) + len(v) for k, v in self._store.items())

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
