"""Durable storage medium interface."""

from collections.abc import Iterable
from typing import Protocol


class IStorage(Protocol):
    """Contract for the medium behind the durable store.

    A flat, string-keyed byte store in the spirit of browser local
    storage. Implementations signal failures by raising
    ``PersistenceError`` (or a subclass); the durable store turns those
    into no-ops.
    """

    def get_item(self, key: str) -> bytes | None:
        """Return the stored bytes for key, or None."""
        ...

    def set_item(self, key: str, value: bytes) -> None:
        """Store bytes under key, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        ...

    def keys(self) -> Iterable[str]:
        """Return every key held by the medium."""
        ...
