from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

STORE_AFTER_QUOTA_ERROR_DELAY = 0.7


@dataclass(frozen=True)
class RetryPolicy:
    """How a binding retries writes that failed on a full store.

    The default retries forever at a fixed delay. `max_retries` caps the
    number of retries, `backoff` multiplies the delay after every failure
    and `max_delay` bounds the grown delay.
    """

    delay: float = STORE_AFTER_QUOTA_ERROR_DELAY
    max_retries: Optional[int] = None
    backoff: float = 1.0
    max_delay: Optional[float] = None

    def next_delay(self, attempt: int) -> Optional[float]:
        """Delay before retrying after failure number `attempt` (1-based),
        or None when no retry should be made."""
        if self.max_retries is not None and attempt > self.max_retries:
            return None
        delay = self.delay * (self.backoff ** (attempt - 1))
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
