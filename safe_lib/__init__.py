"""SafeStore: write-behind persistence of observable records into key-value storage."""

from safe_lib.binding import (
    AlreadyBoundError,
    AsyncioScheduler,
    BindingKind,
    BindingOptions,
    RetryPolicy,
    SafeBinding,
    bind,
    bind_from_config,
)
from safe_lib.bootstrap import SafeRuntime, bootstrap
from safe_lib.records import Collection, Events, Model
from safe_lib.storage import (
    FileStorageBackend,
    MemoryStorage,
    QuotaExceededError,
    StorageAdapter,
    StorageScope,
)

__all__ = [
    "SafeBinding",
    "AlreadyBoundError",
    "BindingKind",
    "BindingOptions",
    "RetryPolicy",
    "AsyncioScheduler",
    "bind",
    "bind_from_config",
    "SafeRuntime",
    "bootstrap",
    "Events",
    "Model",
    "Collection",
    "StorageAdapter",
    "StorageScope",
    "MemoryStorage",
    "FileStorageBackend",
    "QuotaExceededError",
]
