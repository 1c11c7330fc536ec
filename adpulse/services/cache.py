"""In-memory TTL cache owned by whichever service creates it."""

import logging
import time
from collections.abc import Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)


class TTLCache:
    """Key/value cache whose entries expire ``ttl_seconds`` after being set.

    The clock is injectable so expiry can be tested without sleeping. Not
    thread-safe.

    Usage:
        cache = TTLCache(ttl_seconds=300)
        snapshot = cache.get_or_load(account_id, lambda: provider.fetch_snapshot(account_id))
    """

    def __init__(
        self,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be non-negative")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    def get(self, key: Hashable) -> Any | None:
        """Cached value, or None when absent or expired (expired entries are evicted)."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def get_or_load(self, key: Hashable, loader: Callable[[], Any]) -> Any:
        """Return the cached value, calling ``loader`` on a miss.

        A cached ``None`` counts as a hit.
        """
        value = self.get(key)
        if key in self._entries:
            logger.debug("Cache hit: %s", key)
            return value

        logger.debug("Cache miss: %s", key)
        value = loader()
        self.set(key, value)
        return value

    def __len__(self) -> int:
        return len(self._entries)
