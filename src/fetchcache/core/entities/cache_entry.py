"""Cache entry entity."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Generic, TypeVar

V = TypeVar("V")

Clock = Callable[[], float]
"""Callable returning the current time as epoch seconds."""


def ttl_seconds(ttl: timedelta | float) -> float:
    """Normalize a TTL to seconds.

    Args:
        ttl: A timedelta or a number of seconds.

    Returns:
        The TTL in seconds.

    Raises:
        ValueError: If the TTL is not strictly positive.
    """
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    if seconds <= 0:
        raise ValueError(f"TTL must be positive, got {seconds!r} seconds")
    return seconds


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """Immutable cache entry value object.

    Holds a cached value together with the instant it was stored and the
    absolute instant after which it is no longer live. Entries are never
    mutated in place; a new entry replaces the old one.
    """

    value: V
    stored_at: float
    expires_at: float

    def __post_init__(self) -> None:
        """Reject entries that would be born expired."""
        if self.expires_at <= self.stored_at:
            raise ValueError("expires_at must be later than stored_at")

    def is_live(self, now: float) -> bool:
        """Check whether the entry is still live at ``now``.

        The expiry instant itself is still considered live.
        """
        return now <= self.expires_at

    @property
    def ttl(self) -> timedelta:
        """Time-to-live the entry was created with."""
        return timedelta(seconds=self.expires_at - self.stored_at)

    @classmethod
    def create(
        cls,
        value: Any,
        ttl: timedelta | float,
        clock: Clock | None = None,
    ) -> "CacheEntry[Any]":
        """Factory method to create a new cache entry.

        Args:
            value: The value to cache.
            ttl: Time-to-live as a timedelta or seconds.
            clock: Optional clock, defaults to ``time.time``.

        Returns:
            A new CacheEntry instance.
        """
        now = (clock or time.time)()
        return cls(value=value, stored_at=now, expires_at=now + ttl_seconds(ttl))
