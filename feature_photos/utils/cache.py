"""
Response cache for the JSON fetch client.

Entries are keyed by request URL and expire after a TTL. A provider may
ask for an entry to be evicted, e.g. when it returned an answer that should
not be pinned for the lifetime of the entry.
"""

import threading
import time
from collections import OrderedDict
from typing import Any


class MemoryCache:
    """
    Simple in-memory LRU cache with TTL-based expiration.

    Thread-safe: all operations take an internal lock.
    """

    def __init__(self, max_size: int = 1000, default_ttl: int | None = None):
        self._cache: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()  # key -> (value, expires_at)
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Get value from cache if exists and not expired."""
        with self._lock:
            if key not in self._cache:
                return None

            value, expires_at = self._cache[key]

            if expires_at is not None and time.monotonic() > expires_at:
                del self._cache[key]
                return None

            self._cache.move_to_end(key)
            return value

    def set(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Set value in cache with optional TTL. A TTL of 0 or less disables storing."""
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl

        with self._lock:
            if key in self._cache:
                del self._cache[key]

            if ttl is not None and ttl <= 0:
                return

            # Evict oldest if at capacity
            while len(self._cache) >= self._max_size and self._cache:
                self._cache.popitem(last=False)

            expires_at = time.monotonic() + ttl if ttl is not None else None
            self._cache[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        """Delete key from cache."""
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()

    def size(self) -> int:
        """Get current cache size."""
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
