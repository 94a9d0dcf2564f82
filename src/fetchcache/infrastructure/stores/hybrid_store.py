"""Hybrid read-through/write-through store."""

import logging
from datetime import timedelta
from typing import Any

from fetchcache.core.entities.cache_entry import ttl_seconds
from fetchcache.infrastructure.stores.durable_store import DurableStore
from fetchcache.infrastructure.stores.ttl_store import TTLStore

logger = logging.getLogger(__name__)


class HybridStore:
    """Fast in-process store layered over a durable store.

    Reads check the fast store first and fall back to the durable store.
    A durable hit is copied back into the fast store for ``refill_ttl``,
    or for the record's remaining lifetime when that is shorter.
    Writes go to both stores.
    """

    def __init__(
        self,
        fast: TTLStore,
        durable: DurableStore,
        refill_ttl: timedelta | float = timedelta(minutes=5),
    ) -> None:
        """Initialize the hybrid store.

        Args:
            fast: The in-process TTL store.
            durable: The durable store.
            refill_ttl: Fast-store TTL for values promoted from durable storage.
        """
        self._fast = fast
        self._durable = durable
        self._refill_ttl = refill_ttl

        # Statistics
        self._fast_hits = 0
        self._durable_hits = 0
        self._misses = 0

    @property
    def fast(self) -> TTLStore:
        return self._fast

    @property
    def durable(self) -> DurableStore:
        return self._durable

    @property
    def stats(self) -> dict[str, int]:
        """Get read statistics.

        Returns:
            Dictionary with fast hits, durable hits, misses and total reads.
        """
        return {
            "fast_hits": self._fast_hits,
            "durable_hits": self._durable_hits,
            "misses": self._misses,
            "total": self._fast_hits + self._durable_hits + self._misses,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Read through both stores.

        Args:
            key: The cache key to retrieve.
            default: Returned when neither store holds a live value.

        Returns:
            The cached value, or ``default``.
        """
        entry = self._fast.get_entry(key)
        if entry is not None:
            self._fast_hits += 1
            return entry.value

        found = self._durable.get_with_ttl(key)
        if found is None:
            self._misses += 1
            return default

        value, remaining = found
        refill = min(ttl_seconds(self._refill_ttl), remaining)
        if refill > 0:
            logger.debug("Promoting %s from durable storage for %.0fs", key, refill)
            self._fast.set(key, value, refill)
        self._durable_hits += 1
        return value

    def set(
        self,
        key: str,
        value: Any,
        fast_ttl: timedelta | float | None = None,
        durable_ttl: timedelta | float | None = None,
    ) -> None:
        """Write through to both stores.

        Args:
            key: The cache key.
            value: The value to store.
            fast_ttl: TTL in the fast store, defaults to its own default.
            durable_ttl: TTL in the durable store, defaults to its own default.
        """
        self._fast.set(key, value, fast_ttl)
        self._durable.set(key, value, durable_ttl)

    def has(self, key: str) -> bool:
        """Check whether either store holds a live value, without promoting it."""
        return self._fast.has(key) or self._durable.has(key)

    def delete(self, key: str) -> bool:
        """Delete key from both stores.

        Returns:
            True if either store held the key.
        """
        in_fast = self._fast.delete(key)
        in_durable = self._durable.delete(key)
        return in_fast or in_durable

    def clear(self) -> None:
        """Clear both stores."""
        self._fast.clear()
        self._durable.clear()
        self._fast_hits = 0
        self._durable_hits = 0
        self._misses = 0
