import asyncio
import logging

import pytest

from safe_lib import Model, bind, bootstrap
from safe_lib.binding.scheduler import AsyncioScheduler
from safe_lib.bootstrap import build_adapter
from safe_lib.config import SafeSettings, load_settings
from safe_lib.logging_config import configure_logging
from safe_lib.storage.adapter import StorageAdapter, StorageScope
from safe_lib.storage.file_backend import FileStorageBackend
from safe_lib.storage.memory_backend import MemoryStorage


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


def write_config(tmp_path, text):
    path = tmp_path / "safe.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_defaults_when_missing(tmp_path):
    assert load_settings(tmp_path / "absent.yml") == SafeSettings()


def test_load_settings_reads_yaml(tmp_path):
    path = write_config(tmp_path, "debounce_delay: 0.5\nquota_max_retries: 3\nunknown: 1\n")
    s = load_settings(path)
    assert s.debounce_delay == 0.5
    assert s.retry_policy().max_retries == 3


def test_load_settings_bounds_backoff(tmp_path):
    path = write_config(tmp_path, "quota_retry_delay: 0.5\nquota_backoff: 2.0\nquota_max_delay: 1.5\n")
    policy = load_settings(path).retry_policy()
    assert policy.next_delay(2) == 1.0
    assert policy.next_delay(5) == 1.5


@pytest.mark.parametrize("text", ["a: [unclosed\n", "- just\n- a list\n"])
def test_load_settings_rejects_bad_files(tmp_path, text):
    with pytest.raises(ValueError):
        load_settings(write_config(tmp_path, text))


def test_configure_logging_level_from_config(tmp_path, restore_logging):
    configure_logging(write_config(tmp_path, "log_level: debug\n"))
    assert logging.getLogger().level == logging.DEBUG
    configure_logging(write_config(tmp_path, "log_level: nonsense\n"))
    assert logging.getLogger().level == logging.WARNING
    configure_logging(write_config(tmp_path, "log_level: [\n"))
    assert logging.getLogger().level == logging.WARNING


def test_bootstrap_can_configure_logging(tmp_path, clock, restore_logging):
    path = write_config(tmp_path, f"log_level: info\ndata_dir: {tmp_path / 'slots'}\n")
    bootstrap(path, scheduler=clock, setup_logging=True)
    assert logging.getLogger().level == logging.INFO


def test_build_adapter_from_settings(tmp_path):
    adapter = build_adapter(SafeSettings(data_dir=str(tmp_path / "slots"), session_quota_bytes=10))
    assert isinstance(adapter.local, FileStorageBackend)
    assert isinstance(adapter.session, MemoryStorage)
    assert adapter.session.quota_bytes == 10


def test_runtime_applies_settings(tmp_path, clock):
    path = write_config(tmp_path, f"data_dir: {tmp_path / 'slots'}\ndebounce_delay: 0.5\n")
    runtime = bootstrap(path, scheduler=clock)
    m = Model()
    binding = runtime.bind_from_config({"key": "prefs", "type": "session"}, m)
    assert binding.scope is StorageScope.SESSION
    m.set({"lang": "da"})
    clock.advance(0.1)
    assert runtime.adapter.session.get("prefs") == "{}"
    clock.advance(0.4)
    assert runtime.adapter.session.get("prefs") == '{"lang":"da"}'

    local = runtime.bind("draft", Model({"x": 1}))
    local.store()
    assert (tmp_path / "slots" / "draft.slot").read_text(encoding="utf-8") == '{"x":1}'


def test_end_to_end_on_asyncio_loop(tmp_path):
    async def scenario():
        adapter = StorageAdapter(local=FileStorageBackend(tmp_path), session=MemoryStorage())
        user = Model()
        bind("user-1", user, adapter, scheduler=AsyncioScheduler(), debounce_delay=0.01)
        user.set({"name": "A"})
        await asyncio.sleep(0.1)
        return adapter.local.get("user-1")

    assert asyncio.run(scenario()) == '{"name":"A"}'
