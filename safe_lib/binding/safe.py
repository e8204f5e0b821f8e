"""SafeBinding: keep one observable object mirrored into a storage slot.

A binding owns one storage key for the lifetime of its object. At bind time
the slot is created if it is missing or unreadable, prior state is optionally
reloaded into the object, and the binding then listens to the object's
mutation events. Bursts of mutations are coalesced into a single trailing
write. Writes that fail because the store is full trigger ``safeQuotaError``
on the object and are retried according to the binding's `RetryPolicy`.
The object's own ``destroy`` event removes the slot.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Mapping, Optional, Union

from safe_lib.storage.adapter import StorageAdapter, StorageScope
from safe_lib.storage.base import QuotaExceededError
from safe_lib.storage.interfaces import StorageProtocol
from safe_lib.storage.serializer import JSONSerializer, Serializer

from .debounce import STORE_DEBOUNCE_DELAY, Debouncer
from .interfaces import BindingKind, Observable, resolve_kind
from .options import BindingOptions
from .retry import RetryPolicy
from .scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

QUOTA_ERROR_EVENT = "safeQuotaError"
DESTROY_EVENT = "destroy"
# "safe" is the source name older callers pass to fetch
FETCH_SOURCES = ("storage", "safe")


class BindingError(Exception):
    """Base class for binding lifecycle errors."""


class AlreadyBoundError(BindingError):
    """Raised when binding an object that already has a live binding."""


@dataclass(frozen=True)
class _Strategy:
    events: str
    empty_value: str
    shape: type


_STRATEGIES = {
    BindingKind.SINGLE: _Strategy(events="change", empty_value="{}", shape=dict),
    BindingKind.COLLECTION: _Strategy(events="add reset change sort remove", empty_value="[]", shape=list),
}


class SafeBinding:
    def __init__(
        self,
        key: str,
        context: Observable,
        adapter: StorageAdapter,
        scope: Union[StorageScope, str, None] = StorageScope.LOCAL,
        options: Union[BindingOptions, Mapping[str, Any], None] = None,
        *,
        scheduler: Scheduler,
        kind: Union[BindingKind, str, None] = None,
        debounce_delay: float = STORE_DEBOUNCE_DELAY,
        retry_policy: Optional[RetryPolicy] = None,
        serializer: Optional[Serializer] = None,
    ) -> None:
        existing = getattr(context, "safe", None)
        if isinstance(existing, SafeBinding) and not existing.destroyed:
            raise AlreadyBoundError(f"object is already bound to storage key {existing.key!r}")
        if not key or not isinstance(key, str):
            raise ValueError("storage key must be a non-empty string")

        self.key = key
        self.context = context
        self.scope = StorageScope.parse(scope)
        if isinstance(options, BindingOptions):
            self.options = options
        else:
            self.options = BindingOptions.model_validate(dict(options or {}))
        self.kind = resolve_kind(context, kind)
        self.retry_policy = retry_policy or RetryPolicy()
        self.destroyed = False

        self._strategy = _STRATEGIES[self.kind]
        self._adapter = adapter
        self._scheduler = scheduler
        self._serializer = serializer or JSONSerializer()
        self._epoch = 0
        self._retry_handles: Dict[str, TimerHandle] = {}
        self._attempts: Dict[str, int] = {}

        self.ensure_slot()

        # load before subscribing so the initial state is not written back
        if self.options.reload:
            self.reload()

        self._original_fetch = context.fetch
        context.fetch = self.fetch

        self.debounced_store = Debouncer(scheduler, debounce_delay, self._guard(partial(self.store, context)))
        context.on(self._strategy.events, self.debounced_store)
        context.on(DESTROY_EVENT, self._on_destroy)
        context.safe = self
        logger.debug("Bound %s %r to %s storage", self.kind.value, self.key, self.scope.value)

    @property
    def storage(self) -> StorageProtocol:
        return self._adapter.resolve(self.scope)

    @property
    def empty_value(self) -> str:
        return self._strategy.empty_value

    def ensure_slot(self) -> None:
        """Create the slot unless it already holds a snapshot of the right shape."""
        raw = self.storage.get(self.key)
        if raw is not None:
            try:
                data = self._serializer.load(raw)
            except ValueError:
                logger.debug("Slot %r holds malformed data; recreating", self.key)
            else:
                if isinstance(data, self._strategy.shape):
                    return
                logger.debug("Slot %r holds a %s snapshot; recreating", self.key, type(data).__name__)
        self.create()

    def create(self) -> None:
        self._write("create", self._strategy.empty_value, self.create)

    def reset(self) -> None:
        """Overwrite the slot with the empty value."""
        self.create()

    def store(self, obj: Any = None) -> None:
        target = self.context if obj is None else obj
        value = self._serializer.dump(self.to_json(target))
        self._write("store", value, partial(self.store, target))

    def flush(self) -> None:
        """Write a pending debounced snapshot immediately."""
        self.debounced_store.flush()

    def to_json(self, obj: Any) -> Any:
        if self.kind is BindingKind.SINGLE:
            return obj.to_json()
        # an item event hands over the item; persist its whole collection
        if not hasattr(obj, "models") and getattr(obj, "collection", None) is not None:
            obj = obj.collection
        data = obj.to_json()
        limit = self.options.max_collection_length
        if limit:
            data = data[-limit:]
        return data

    def get_data(self) -> Any:
        """Return the parsed slot, None when absent and {} when malformed."""
        raw = self.storage.get(self.key)
        if raw is None:
            return None
        try:
            return self._serializer.load(raw)
        except ValueError:
            logger.debug("Slot %r holds malformed data; treating as empty", self.key)
            return {}

    def reload(self, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        opts = {
            k: v for k, v in dict(options or {}, **kwargs).items()
            if k not in ("from", "source")
        }
        data = self.get_data()
        if not isinstance(data, self._strategy.shape):
            logger.debug("Nothing to reload for %r", self.key)
            return
        if self.kind is BindingKind.COLLECTION:
            self.context.add(data, **opts)
        else:
            self.context.set(data, **opts)

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        """Reload from storage when asked to fetch ``from`` storage, otherwise
        defer to the object's own fetch."""
        options = args[0] if args and isinstance(args[0], Mapping) else {}
        opts = dict(options, **kwargs)
        if opts.get("from", opts.get("source")) in FETCH_SOURCES:
            return self.reload(opts)
        return self._original_fetch(*args, **kwargs)

    def destroy(self) -> None:
        """Remove the slot and detach from the object. Safe to call twice."""
        if not self.destroyed:
            self.destroyed = True
            self._epoch += 1
            self.debounced_store.cancel()
            for handle in self._retry_handles.values():
                handle.cancel()
            self._retry_handles.clear()
            self._attempts.clear()
            self.context.off(self._strategy.events, self.debounced_store)
            self.context.off(DESTROY_EVENT, self._on_destroy)
            self.context.fetch = self._original_fetch
            logger.debug("Destroyed binding %r", self.key)
        self.storage.remove(self.key)

    def _on_destroy(self, *args: Any) -> None:
        self.destroy()

    def _guard(self, fn: Callable[[], Any]) -> Callable[[], None]:
        # callbacks scheduled before destroy become no-ops
        epoch = self._epoch

        def run() -> None:
            if self._epoch == epoch:
                fn()

        return run

    def _write(self, op: str, value: str, retry: Callable[[], Any]) -> bool:
        try:
            self.storage.set(self.key, value)
        except QuotaExceededError as e:
            self._on_quota_error(op, e, retry)
            return False
        # a stored snapshot also fills the slot, so a pending create is stale
        for settled in (op, "create") if op == "store" else (op,):
            self._attempts.pop(settled, None)
            handle = self._retry_handles.pop(settled, None)
            if handle is not None:
                handle.cancel()
        return True

    def _on_quota_error(self, op: str, error: QuotaExceededError, retry: Callable[[], Any]) -> None:
        attempt = self._attempts.get(op, 0) + 1
        self._attempts[op] = attempt
        logger.warning("Quota exceeded during %s of %r (failure %d): %s", op, self.key, attempt, error)

        previous = self._retry_handles.pop(op, None)
        if previous is not None:
            previous.cancel()
        delay = self.retry_policy.next_delay(attempt)
        if delay is None:
            logger.error("Giving up %s of %r after %d failures", op, self.key, attempt)
            self._attempts.pop(op, None)
        else:
            self._retry_handles[op] = self._scheduler.call_later(delay, self._guard(retry))

        self.context.trigger(QUOTA_ERROR_EVENT, self.context, error)

    def __repr__(self) -> str:
        return f"SafeBinding(key={self.key!r}, kind={self.kind.value}, scope={self.scope.value})"
