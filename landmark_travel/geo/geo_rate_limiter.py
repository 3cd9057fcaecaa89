"""
Fixed-window rate limiter keyed by caller.

Each key gets a counter that resets once its window has elapsed. A burst
straddling a window boundary can admit up to twice the nominal maximum;
that is acceptable for coarse abuse prevention.
"""

import threading
import time
from dataclasses import dataclass
from typing import Dict

from ..config.logger_module import log_info, log_warning


@dataclass
class RateLimitBucket:
    count: int
    reset_at: float


class FixedWindowRateLimiter:
    """
    Per-key request counter with a hard reset boundary.

    Buckets are created on first use and replaced when their window ends;
    they are never removed unless purge_expired() is called.
    """

    def __init__(self):
        self._buckets: Dict[str, RateLimitBucket] = {}
        self._lock = threading.Lock()

    def allow(self, key: str, max_requests: int, window_seconds: float) -> bool:
        """
        Record a request for key and report whether it is admitted.

        Args:
            key: Caller identity, e.g. "travel:203.0.113.7"
            max_requests: Requests admitted per window
            window_seconds: Window length

        Returns:
            True if admitted, False if the window is already full
        """
        now = time.monotonic()
        with self._lock:
            bucket = self._buckets.get(key)

            if bucket is None or now > bucket.reset_at:
                self._buckets[key] = RateLimitBucket(count=1, reset_at=now + window_seconds)
                return True

            if bucket.count >= max_requests:
                log_warning(
                    f"Rate limit reached for '{key}' "
                    f"({bucket.count}/{max_requests}, resets in {bucket.reset_at - now:.0f}s)"
                )
                return False

            bucket.count += 1
            return True

    def purge_expired(self) -> int:
        """Drop buckets whose window has elapsed; returns how many were removed."""
        now = time.monotonic()
        with self._lock:
            stale = [key for key, bucket in self._buckets.items() if now > bucket.reset_at]
            for key in stale:
                del self._buckets[key]

        if stale:
            log_info(f"Purged {len(stale)} expired rate limit bucket(s)")
        return len(stale)

    def __len__(self) -> int:
        return len(self._buckets)
