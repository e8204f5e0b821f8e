from __future__ import annotations
from typing import Any, Callable, Optional

from .scheduler import Scheduler, TimerHandle

STORE_DEBOUNCE_DELAY = 0.1


class Debouncer:
    """Trailing-edge debounce.

    Every call restarts the window; the callback runs once, without
    arguments, when `delay` seconds pass with no further calls. Call
    arguments (event payloads) are ignored.
    """

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[[], Any]) -> None:
        self.delay = delay
        self._scheduler = scheduler
        self._callback = callback
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self._scheduler.call_later(self.delay, self._fire)

    def flush(self) -> None:
        """Run a pending callback now."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
