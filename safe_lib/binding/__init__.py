"""Bindings between observable objects and storage slots."""

from .debounce import STORE_DEBOUNCE_DELAY, Debouncer
from .factory import bind, bind_from_config
from .interfaces import BindingKind, Observable, classify
from .options import BindingOptions
from .retry import STORE_AFTER_QUOTA_ERROR_DELAY, RetryPolicy
from .safe import QUOTA_ERROR_EVENT, AlreadyBoundError, BindingError, SafeBinding
from .scheduler import AsyncioScheduler, Scheduler

__all__ = [
    "SafeBinding",
    "BindingError",
    "AlreadyBoundError",
    "BindingKind",
    "BindingOptions",
    "classify",
    "Observable",
    "bind",
    "bind_from_config",
    "Debouncer",
    "RetryPolicy",
    "Scheduler",
    "AsyncioScheduler",
    "QUOTA_ERROR_EVENT",
    "STORE_DEBOUNCE_DELAY",
    "STORE_AFTER_QUOTA_ERROR_DELAY",
]
