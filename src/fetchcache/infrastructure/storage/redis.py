"""Redis storage medium."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import redis

from fetchcache.core.errors import PersistenceError, StorageUnavailableError


class RedisStorage:
    """Storage medium backed by a Redis server.

    Uses the synchronous client because the durable store contract is
    synchronous. Connection problems surface as
    ``StorageUnavailableError``, every other Redis failure as
    ``PersistenceError``.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        client: redis.Redis | None = None,
        scan_pattern: str = "*",
    ) -> None:
        """Initialize the Redis storage.

        Args:
            redis_url: Redis connection URL, used when no client is given.
            client: Optional preconfigured client.
            scan_pattern: Pattern used by ``keys`` when scanning.
        """
        self._redis: redis.Redis = (
            client if client is not None else redis.from_url(redis_url)
        )
        self._scan_pattern = scan_pattern

    def get_item(self, key: str) -> bytes | None:
        with self._errors():
            return self._redis.get(key)

    def set_item(self, key: str, value: bytes) -> None:
        with self._errors():
            self._redis.set(key, value)

    def remove_item(self, key: str) -> None:
        with self._errors():
            self._redis.delete(key)

    def keys(self) -> Iterable[str]:
        """Return all matching keys using SCAN.

        Uses SCAN instead of KEYS for production safety.
        """
        found: list[str] = []
        cursor = 0
        with self._errors():
            while True:
                cursor, keys = self._redis.scan(
                    cursor, match=self._scan_pattern, count=100
                )
                found.extend(
                    key.decode() if isinstance(key, bytes) else key for key in keys
                )
                if cursor == 0:
                    break
        return found

    def close(self) -> None:
        """Close the Redis connection."""
        self._redis.close()

    @contextmanager
    def _errors(self) -> Iterator[None]:
        """Translate Redis exceptions into persistence errors."""
        try:
            yield
        except redis.ConnectionError as e:
            raise StorageUnavailableError(str(e)) from e
        except redis.RedisError as e:
            raise PersistenceError(str(e)) from e
