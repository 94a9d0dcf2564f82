"""Negative cache: memory of failed requests."""

import logging
from datetime import timedelta

from fetchcache.core.interfaces.store import IStore

logger = logging.getLogger(__name__)

FINAL_ERROR_SUFFIX = ":final_error"
TRANSIENT_ERROR_SUFFIX = ":error"


class NegativeCache:
    """Remembers failures per cache key to suppress repeated attempts.

    Two boolean records may exist for one key at the same time: a
    transient record, written on every failure with a short TTL, and a
    final record, written only for non-retryable failures with a long
    TTL. Both live in a TTL store under derived keys.
    """

    def __init__(
        self,
        store: IStore,
        transient_ttl: timedelta | float = timedelta(seconds=30),
        final_ttl: timedelta | float = timedelta(hours=1),
    ) -> None:
        """Initialize the negative cache.

        Args:
            store: TTL store holding the records.
            transient_ttl: Lifetime of transient records.
            final_ttl: Lifetime of final records.
        """
        self._store = store
        self._transient_ttl = transient_ttl
        self._final_ttl = final_ttl

    @property
    def store(self) -> IStore:
        return self._store

    @staticmethod
    def final_key(key: str) -> str:
        return key + FINAL_ERROR_SUFFIX

    @staticmethod
    def transient_key(key: str) -> str:
        return key + TRANSIENT_ERROR_SUFFIX

    def is_final(self, key: str) -> bool:
        """Check for an unexpired final record."""
        return self._store.has(self.final_key(key))

    def is_transient(self, key: str) -> bool:
        """Check for an unexpired transient record."""
        return self._store.has(self.transient_key(key))

    def record_failure(self, key: str, final: bool) -> None:
        """Remember a failure for key.

        Args:
            key: The cache key of the failed request.
            final: Whether the failure was classified non-retryable.
        """
        if final:
            self._store.set(self.final_key(key), True, self._final_ttl)
        self._store.set(self.transient_key(key), True, self._transient_ttl)
        logger.debug("Recorded %s failure for %s", "final" if final else "transient", key)

    def clear(self, key: str) -> None:
        """Forget both records for key."""
        self._store.delete(self.final_key(key))
        self._store.delete(self.transient_key(key))
