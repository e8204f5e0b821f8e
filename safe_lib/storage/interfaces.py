from typing import Protocol, Optional, runtime_checkable


@runtime_checkable
class StorageProtocol(Protocol):
    """Store protocol mirroring `safe_lib.storage.StorageBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `safe_lib.storage.base` (None for missing keys, no-op
    removal, QuotaExceededError on capacity failures).
    """

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
