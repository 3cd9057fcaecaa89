"""
In-memory cache with per-entry expiry.

Entries expire strictly (reads never extend their lifetime) and are only
purged when a read discovers them stale. There is no background sweep.
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from ..config.logger_module import log_debug


T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_at: float


class TimeBoundedCache(Generic[T]):
    """
    Key/value store where every entry carries its own expiry time.

    Used for geocode results, distance lookups and short-link expansions.
    A lock guards each read-modify-write because travel legs are fetched
    from worker threads.
    """

    def __init__(self, default_ttl: float, name: str = "cache"):
        """
        Initialize the cache.

        Args:
            default_ttl: Seconds an entry lives when set() gets no ttl
            name: Label used in debug logs
        """
        self.default_ttl = default_ttl
        self.name = name
        self._store: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[T]:
        """
        Return the cached value, or None when missing or expired.

        An expired entry is removed by the read that finds it.
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None

            if time.monotonic() > entry.expires_at:
                del self._store[key]
                log_debug(f"{self.name}: expired entry for '{key}'")
                return None

            return entry.value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Store value under key, replacing any existing entry."""
        lifetime = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._store[key] = CacheEntry(value, time.monotonic() + lifetime)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        # Counts expired-but-unread entries too
        return len(self._store)

    def __contains__(self, key: Any) -> bool:
        return self.get(key) is not None
