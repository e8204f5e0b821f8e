import pytest

from safe_lib.storage.adapter import StorageAdapter, StorageScope
from safe_lib.storage.interfaces import StorageProtocol
from safe_lib.storage.memory_backend import MemoryStorage


def test_resolve_maps_scope_to_store():
    local, session = MemoryStorage(), MemoryStorage()
    adapter = StorageAdapter(local=local, session=session)
    assert adapter.resolve(StorageScope.LOCAL) is local
    assert adapter.resolve(StorageScope.SESSION) is session
    assert adapter.resolve("session") is session
    assert adapter.resolve(None) is local


def test_scope_parse():
    assert StorageScope.parse("Session") is StorageScope.SESSION
    assert StorageScope.parse(None) is StorageScope.LOCAL
    assert StorageScope.parse(StorageScope.LOCAL) is StorageScope.LOCAL
    with pytest.raises(ValueError):
        StorageScope.parse("cookie")


def test_memory_storage_satisfies_protocol():
    assert isinstance(MemoryStorage(), StorageProtocol)
