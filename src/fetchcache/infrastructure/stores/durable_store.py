"""Durable store implementation."""

import logging
import time
from datetime import timedelta
from typing import Any

from fetchcache.core.entities.cache_entry import Clock, ttl_seconds
from fetchcache.core.errors import PersistenceError
from fetchcache.core.interfaces.serializer import ISerializer
from fetchcache.core.interfaces.storage import IStorage
from fetchcache.infrastructure.serializers.json import JsonSerializer, SerializationError

logger = logging.getLogger(__name__)

_MISSING = object()


class DurableStore:
    """Persistent mirror of the TTL store contract.

    Entries are written to a storage medium as
    ``{"value": ..., "expiresAt": <epoch millis>}`` records under a
    namespaced key. Durability is an optimization: any storage or
    serialization failure is logged and the operation becomes a no-op.
    Expired records are removed lazily on read and in bulk by
    ``cleanup``, which runs once at startup.
    """

    def __init__(
        self,
        storage: IStorage,
        prefix: str = "app_cache_",
        default_ttl: timedelta | float = timedelta(days=1),
        serializer: ISerializer | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the durable store.

        Args:
            storage: The storage medium.
            prefix: Namespace prepended to every key.
            default_ttl: TTL used when ``set`` is called without one.
            serializer: Record serializer, defaults to JSON.
            clock: Returns the current time in epoch seconds.
        """
        self._storage = storage
        self._prefix = prefix
        self._default_ttl = default_ttl
        self._serializer = serializer or JsonSerializer()
        self._clock = clock or time.time

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a live value by key.

        Args:
            key: The cache key to retrieve.
            default: Returned when the key is absent, expired or unreadable.

        Returns:
            The cached value, or ``default``.
        """
        record = self._live_record(key)
        return default if record is None else record["value"]

    def get_with_ttl(self, key: str) -> tuple[Any, float] | None:
        """Retrieve a live value together with its remaining lifetime.

        Returns:
            ``(value, remaining_seconds)``, or None on a miss.
        """
        record = self._live_record(key)
        if record is None:
            return None
        return record["value"], record["expiresAt"] / 1000 - self._clock()

    def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | float | None = None,
    ) -> None:
        """Store value with a TTL.

        Args:
            key: The cache key.
            value: The value to store. Must be JSON-serializable for the
                default serializer.
            ttl: Optional time-to-live. If None, uses the store default.

        Raises:
            ValueError: If the TTL is not positive.
        """
        seconds = ttl_seconds(ttl if ttl is not None else self._default_ttl)
        record = {
            "value": value,
            "expiresAt": int((self._clock() + seconds) * 1000),
        }
        try:
            self._storage.set_item(self._prefix + key, self._serializer.serialize(record))
        except (PersistenceError, SerializationError) as e:
            logger.warning("Durable cache set failed for %s: %s", key, e)

    def has(self, key: str) -> bool:
        """Check if a live entry exists for key."""
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str) -> bool:
        """Delete an entry.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        storage_key = self._prefix + key
        try:
            if self._storage.get_item(storage_key) is None:
                return False
            self._storage.remove_item(storage_key)
            return True
        except PersistenceError as e:
            logger.warning("Durable cache delete failed for %s: %s", key, e)
            return False

    def clear(self) -> None:
        """Remove every entry under this store's prefix."""
        try:
            for storage_key in self._own_keys():
                self._storage.remove_item(storage_key)
        except PersistenceError as e:
            logger.warning("Durable cache clear failed: %s", e)

    def cleanup(self) -> int:
        """Delete every expired or undecodable record under the prefix.

        Returns:
            Number of records removed.
        """
        removed = 0
        try:
            for storage_key in self._own_keys():
                raw = self._storage.get_item(storage_key)
                if raw is None:
                    continue
                try:
                    expired = self._is_expired(self._serializer.deserialize(raw))
                except (SerializationError, KeyError, TypeError):
                    expired = True
                if expired:
                    self._storage.remove_item(storage_key)
                    removed += 1
        except PersistenceError as e:
            logger.warning("Durable cache cleanup failed: %s", e)
        if removed:
            logger.debug("Purged %d expired durable records", removed)
        return removed

    def keys(self) -> list[str]:
        """Return stored keys without the prefix, expired ones included."""
        try:
            return [k[len(self._prefix):] for k in self._own_keys()]
        except PersistenceError as e:
            logger.warning("Durable cache keys failed: %s", e)
            return []

    def __len__(self) -> int:
        return len(self.keys())

    @property
    def prefix(self) -> str:
        """Return the key namespace."""
        return self._prefix

    def _own_keys(self) -> list[str]:
        return [k for k in self._storage.keys() if k.startswith(self._prefix)]

    def _live_record(self, key: str) -> dict[str, Any] | None:
        storage_key = self._prefix + key
        try:
            raw = self._storage.get_item(storage_key)
            if raw is None:
                return None
            record = self._serializer.deserialize(raw)
            if "value" not in record or self._is_expired(record):
                self._storage.remove_item(storage_key)
                return None
            return record
        except (PersistenceError, SerializationError, KeyError, TypeError) as e:
            logger.warning("Durable cache get failed for %s: %s", key, e)
            return None

    def _is_expired(self, record: dict[str, Any]) -> bool:
        return self._clock() * 1000 > record["expiresAt"]
