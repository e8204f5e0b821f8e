import pytest

from safe_lib.storage.base import QuotaExceededError
from safe_lib.storage.memory_backend import MemoryStorage


def test_memory_basic_operations():
    m = MemoryStorage()

    # set/get
    m.set('k', 'v')
    assert m.get('k') == 'v'

    # remove, twice is fine
    m.remove('k')
    assert m.get('k') is None
    m.remove('k')

    m.set('a', '1')
    m.set('b', '22')
    assert sorted(m.keys()) == ['a', 'b']
    assert m.usage() == 2 + 3
    m.clear()
    assert list(m.keys()) == []


def test_memory_quota_rejects_write_and_keeps_state():
    m = MemoryStorage(quota_bytes=10)
    m.set('k', 'abcd')          # 1 + 4
    with pytest.raises(QuotaExceededError) as exc:
        m.set('j', 'abcdefgh')  # would need 5 + 9
    assert exc.value.key == 'j'
    assert exc.value.quota == 10
    assert m.get('j') is None
    assert m.get('k') == 'abcd'


def test_memory_quota_counts_replaced_value_once():
    m = MemoryStorage(quota_bytes=10)
    m.set('k', 'abcdefgh')
    # replacing the value frees the old one first
    m.set('k', 'zyxwvuts')
    assert m.get('k') == 'zyxwvuts'
