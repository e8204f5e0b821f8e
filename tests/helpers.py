from typing import Callable, List, Optional

from safe_lib.storage.adapter import StorageAdapter
from safe_lib.storage.base import QuotaExceededError
from safe_lib.storage.memory_backend import MemoryStorage


class ManualHandle:
    def __init__(self, when: float, seq: int, callback: Callable[[], None]):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: timers only fire when the test calls `advance`.

    Usage in tests:
        clock = ManualScheduler()
        binding = SafeBinding(..., scheduler=clock)
        clock.advance(0.1)
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = 0
        self._timers: List[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        self._seq += 1
        handle = ManualHandle(self.now + delay, self._seq, callback)
        self._timers.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target + 1e-9]
            if not due:
                break
            nxt = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(nxt)
            self.now = max(self.now, nxt.when)
            nxt.callback()
        self._timers = [t for t in self._timers if not t.cancelled]
        self.now = target


class FlakyStorage(MemoryStorage):
    """Memory store whose next `failures` writes raise QuotaExceededError."""

    def __init__(self, failures: int = 0, quota_bytes: Optional[int] = None):
        super().__init__(quota_bytes=quota_bytes)
        self.failures = failures
        self.writes: List[tuple] = []

    def set(self, key: str, value: str) -> None:
        if self.failures > 0:
            self.failures -= 1
            raise QuotaExceededError(key, len(value), 0)
        super().set(key, value)
        self.writes.append((key, value))


def make_adapter(local=None, session=None) -> StorageAdapter:
    return StorageAdapter(local=local or FlakyStorage(), session=session or FlakyStorage())
