"""In-process TTL store implementation."""

import logging
import time
from datetime import timedelta
from typing import Any

from cachetools import Cache, FIFOCache, LRUCache  # type: ignore[import-untyped]

from fetchcache.core.entities.cache_entry import CacheEntry, Clock

logger = logging.getLogger(__name__)


class TTLStore:
    """Size-bounded in-memory store with per-entry TTL.

    Every entry carries its own absolute expiry. Expired entries are
    removed lazily when read, or in bulk by ``cleanup``. When the store
    is full, inserting a new key evicts the earliest-inserted entry
    (``eviction="fifo"``) or the least-recently-read one
    (``eviction="lru"``). Capacity bookkeeping is delegated to cachetools.
    """

    def __init__(
        self,
        maxsize: int = 100,
        default_ttl: timedelta | float = timedelta(minutes=5),
        eviction: str = "fifo",
        clock: Clock | None = None,
    ) -> None:
        """Initialize the TTL store.

        Args:
            maxsize: Maximum number of entries.
            default_ttl: TTL used when ``set`` is called without one.
            eviction: ``"fifo"`` or ``"lru"``.
            clock: Returns the current time in epoch seconds.
        """
        if eviction == "fifo":
            self._cache: Cache = FIFOCache(maxsize=maxsize)
        elif eviction == "lru":
            self._cache = LRUCache(maxsize=maxsize)
        else:
            raise ValueError(f"Unknown eviction policy: {eviction!r}")
        self._maxsize = maxsize
        self._default_ttl = default_ttl
        self._eviction = eviction
        self._clock = clock or time.time

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a live value by key.

        LRU stores count this read as a use of the entry.

        Args:
            key: The cache key to retrieve.
            default: Returned when the key is absent or expired.

        Returns:
            The cached value, or ``default``.
        """
        entry = self._live_entry(key, touch=True)
        return default if entry is None else entry.value

    def get_entry(self, key: str) -> CacheEntry[Any] | None:
        """Return the live entry for key, with its timestamps."""
        return self._live_entry(key, touch=True)

    def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | float | None = None,
    ) -> None:
        """Store value with a TTL.

        Replacing an existing key never evicts another entry.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses the store default.

        Raises:
            ValueError: If the TTL is not positive.
        """
        entry = CacheEntry.create(
            value,
            ttl if ttl is not None else self._default_ttl,
            clock=self._clock,
        )
        self._cache[key] = entry

    def has(self, key: str) -> bool:
        """Check if a live entry exists for key.

        Does not count as a use for LRU ordering.
        """
        return self._live_entry(key, touch=False) is not None

    def delete(self, key: str) -> bool:
        """Delete an entry.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every entry."""
        self._cache.clear()

    def cleanup(self) -> int:
        """Delete every expired entry.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        expired = [
            key for key, entry in list(self._cache.items())
            if not entry.is_live(now)
        ]
        for key in expired:
            self._cache.pop(key, None)
        if expired:
            logger.debug("Purged %d expired entries", len(expired))
        return len(expired)

    def keys(self) -> list[str]:
        """Return the stored keys.

        May include entries that have expired but not yet been purged.
        """
        return list(self._cache.keys())

    def stats(self) -> dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with current size, max size and keys.
        """
        return {
            "size": len(self._cache),
            "max_size": self._maxsize,
            "keys": self.keys(),
        }

    def _live_entry(self, key: str, touch: bool) -> CacheEntry[Any] | None:
        if touch:
            entry = self._cache.get(key)
        else:
            # The base class lookup skips the LRU reordering
            try:
                entry = Cache.__getitem__(self._cache, key)
            except KeyError:
                entry = None
        if entry is None:
            return None
        if not entry.is_live(self._clock()):
            self._cache.pop(key, None)
            return None
        return entry

    def __len__(self) -> int:
        """Return the number of entries, expired ones included."""
        return len(self._cache)

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the store."""
        return self._maxsize

    @property
    def eviction(self) -> str:
        """Return the eviction policy name."""
        return self._eviction
