"""In-memory base URL cache with lazy expiry.

Entries live for the lifetime of the process and are never swept: an entry
older than the caller's timeout is dropped when it is next read. Memory is
therefore bounded by the number of distinct projects seen by this process.

The timeout is supplied per read so a configuration change applies to
entries that are already cached. Zero or negative timeouts are taken
literally and make every entry stale.
"""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

import structlog

from codelink.models.cache import CacheEntry

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


class UrlCache:
    """Project name → resolved base URL, implementing CacheProtocol."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        # Makes read-then-evict and put atomic if a host calls in from threads
        self._lock = threading.Lock()

    def get(self, key: str, timeout_seconds: float) -> str | None:
        """Return the cached value, or ``None`` if missing or expired.

        An expired entry is removed as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            age = self._clock() - entry.timestamp
            if age < timeout_seconds:
                return entry.value
            del self._entries[key]

        log.debug("cache_entry_expired", key=key, age_seconds=round(age, 3))
        return None

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns whether anything was removed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear_all(self) -> int:
        """Drop every entry and return how many there were."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        # Raw presence, ignoring expiry
        with self._lock:
            return key in self._entries
