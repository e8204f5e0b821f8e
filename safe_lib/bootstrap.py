"""Bootstrap helpers for SafeStore.

Composes the stores, the storage adapter and the scheduler from settings,
so applications bind objects through one `SafeRuntime` instead of wiring
collaborators by hand.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from safe_lib.binding.factory import Declaration, bind, bind_from_config
from safe_lib.binding.options import BindingOptions
from safe_lib.binding.safe import SafeBinding
from safe_lib.binding.scheduler import AsyncioScheduler, Scheduler
from safe_lib.config import SafeSettings, load_settings
from safe_lib.logging_config import configure_logging
from safe_lib.storage import create_storage
from safe_lib.storage.adapter import StorageAdapter, StorageScope

logger = logging.getLogger(__name__)


def build_adapter(settings: SafeSettings) -> StorageAdapter:
    """Local scope on disk under `data_dir`, session scope in memory."""
    local = create_storage("file", data_dir=settings.data_dir, quota_bytes=settings.local_quota_bytes)
    session = create_storage("memory", quota_bytes=settings.session_quota_bytes)
    return StorageAdapter(local=local, session=session)


def binding_defaults(settings: SafeSettings) -> Dict[str, Any]:
    return {
        "debounce_delay": settings.debounce_delay,
        "retry_policy": settings.retry_policy(),
    }


@dataclass
class SafeRuntime:
    settings: SafeSettings
    adapter: StorageAdapter
    scheduler: Scheduler

    def bind(
        self,
        key: Optional[str],
        obj: Any,
        scope: Union[StorageScope, str, None] = StorageScope.LOCAL,
        options: Union[BindingOptions, Mapping[str, Any], None] = None,
        **kwargs: Any,
    ) -> Optional[SafeBinding]:
        params = {**binding_defaults(self.settings), "scheduler": self.scheduler, **kwargs}
        return bind(key, obj, self.adapter, scope, options, **params)

    def bind_from_config(self, config: Declaration, obj: Any, **kwargs: Any) -> Optional[SafeBinding]:
        params = {**binding_defaults(self.settings), "scheduler": self.scheduler, **kwargs}
        return bind_from_config(config, obj, self.adapter, **params)


def bootstrap(
    config_path: Optional[Path | str] = None,
    settings: Optional[SafeSettings] = None,
    adapter: Optional[StorageAdapter] = None,
    scheduler: Optional[Scheduler] = None,
    setup_logging: bool = False,
) -> SafeRuntime:
    """Build a runtime; explicit collaborators win over settings.

    With `setup_logging` the root logger is configured from the same
    settings file. Applications that own their logging leave it off.
    """
    if setup_logging:
        configure_logging(config_path)
    settings = settings or load_settings(config_path)
    adapter = adapter or build_adapter(settings)
    scheduler = scheduler or AsyncioScheduler()
    logger.debug("SafeStore runtime ready (data_dir=%s)", settings.data_dir)
    return SafeRuntime(settings=settings, adapter=adapter, scheduler=scheduler)
