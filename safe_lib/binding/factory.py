"""Factory helpers that turn a storage declaration into a SafeBinding.

A declaration is either a bare storage key or a mapping::

    {"key": "my-unique-key", "type": "session", "options": {"reload": True}}

`type` defaults to the local scope. A declaration without options reloads
stored state at bind time. Missing keys or objects are not an error: no
binding is created.
"""
from __future__ import annotations
import logging
from typing import Any, Mapping, Optional, Union

from safe_lib.storage.adapter import StorageAdapter, StorageScope

from .options import BindingOptions
from .safe import SafeBinding

logger = logging.getLogger(__name__)

Declaration = Union[str, Mapping[str, Any], None]


def bind(
    key: Optional[str],
    obj: Any,
    adapter: StorageAdapter,
    scope: Union[StorageScope, str, None] = StorageScope.LOCAL,
    options: Union[BindingOptions, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> Optional[SafeBinding]:
    if not key or obj is None:
        logger.debug("Skipping binding: key=%r object=%r", key, obj)
        return None
    return SafeBinding(key, obj, adapter, scope, options, **kwargs)


def bind_from_config(config: Declaration, obj: Any, adapter: StorageAdapter, **kwargs: Any) -> Optional[SafeBinding]:
    if not config:
        return None
    if isinstance(config, Mapping):
        key = config.get("key")
        scope = config.get("type") or StorageScope.LOCAL
        options = config.get("options")
    else:
        key, scope, options = config, StorageScope.LOCAL, None
    if options is None:
        options = {"reload": True}
    return bind(key, obj, adapter, scope, options, **kwargs)
