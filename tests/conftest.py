"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def clock():
    from tests.helpers import ManualScheduler
    return ManualScheduler()


@pytest.fixture
def local_store():
    from tests.helpers import FlakyStorage
    return FlakyStorage()


@pytest.fixture
def adapter(local_store):
    from tests.helpers import FlakyStorage, make_adapter
    return make_adapter(local=local_store, session=FlakyStorage())
