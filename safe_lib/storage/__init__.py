"""Storage abstraction package for SafeStore."""
from __future__ import annotations
from pathlib import Path
from typing import Optional

from .adapter import StorageAdapter, StorageScope
from .base import QuotaExceededError, StorageBackend, StorageError
from .file_backend import FileStorageBackend
from .memory_backend import MemoryStorage


def create_storage(
    backend: str = "memory",
    data_dir: str | Path = "./data/safe",
    quota_bytes: Optional[int] = None,
) -> StorageBackend:
    """Create a store by backend name ('memory' or 'file')."""
    if backend == "memory":
        return MemoryStorage(quota_bytes=quota_bytes)
    if backend == "file":
        return FileStorageBackend(data_dir=data_dir, quota_bytes=quota_bytes)
    raise ValueError(f"unknown storage backend {backend!r}")


__all__ = [
    "StorageBackend",
    "StorageError",
    "QuotaExceededError",
    "FileStorageBackend",
    "MemoryStorage",
    "StorageAdapter",
    "StorageScope",
    "create_storage",
]
