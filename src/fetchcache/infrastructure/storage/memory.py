"""In-memory storage medium."""

from collections.abc import Iterable

from fetchcache.core.errors import StorageQuotaExceededError, StorageUnavailableError


class MemoryStorage:
    """Dict-backed storage medium with an optional byte quota.

    Survives as long as the object does, so handing the same instance to
    a fresh durable store simulates a reload. ``quota`` and ``disabled``
    reproduce the failure modes of browser storage.
    """

    def __init__(self, quota: int | None = None) -> None:
        """Initialize the storage.

        Args:
            quota: Maximum total size in bytes of keys plus values.
                None means unlimited.
        """
        self._items: dict[str, bytes] = {}
        self._quota = quota
        self.disabled = False

    def get_item(self, key: str) -> bytes | None:
        self._check_available()
        return self._items.get(key)

    def set_item(self, key: str, value: bytes) -> None:
        """Store bytes under key.

        Raises:
            StorageQuotaExceededError: If the write would exceed the quota.
            StorageUnavailableError: If the storage is disabled.
        """
        self._check_available()
        if self._quota is not None:
            current = self.used_bytes - self._size_of(key, self._items.get(key))
            if current + self._size_of(key, value) > self._quota:
                raise StorageQuotaExceededError(
                    f"Storing {key!r} would exceed the {self._quota} byte quota"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._check_available()
        self._items.pop(key, None)

    def keys(self) -> Iterable[str]:
        self._check_available()
        return list(self._items)

    @property
    def used_bytes(self) -> int:
        """Total size of stored keys and values in bytes."""
        return sum(self._size_of(key, value) for key, value in self._items.items())

    def _check_available(self) -> None:
        if self.disabled:
            raise StorageUnavailableError("Storage is disabled")

    @staticmethod
    def _size_of(key: str, value: bytes | None) -> int:
        if value is None:
            return 0
        return len(key.encode()) + len(value)

    def __len__(self) -> int:
        return len(self._items)
