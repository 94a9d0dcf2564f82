"""Keyed store interface."""

from datetime import timedelta
from typing import Any, Protocol


class IStore(Protocol):
    """Contract for synchronous TTL keyed stores.

    Implemented by the in-process TTL store and the durable store.
    Reads of an expired entry must delete it and behave as a miss.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieve a live value by key.

        Args:
            key: The cache key to retrieve.
            default: Returned when the key is absent or expired.

        Returns:
            The cached value, or ``default``.
        """
        ...

    def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | float | None = None,
    ) -> None:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to store.
            ttl: Optional time-to-live. If None, uses the store default.
        """
        ...

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        ...

    def delete(self, key: str) -> bool:
        """Delete an entry.

        Returns:
            True if the key existed and was deleted, False otherwise.
        """
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...

    def cleanup(self) -> int:
        """Purge all expired entries.

        Returns:
            Number of entries removed.
        """
        ...
