"""Cache statistics entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time view of the cache layer.

    Attributes:
        memory_size: Entries in the fast store, expired ones included.
        max_size: Capacity of the fast store.
        keys: Keys held by the fast store.
        durable_size: Records under the durable store's prefix.
        negative_size: Failure records currently held.
        fast_hits: Reads served by the fast store.
        durable_hits: Reads served by the durable store.
        misses: Reads served by neither store.
        in_flight: Network calls currently shared between subscribers.
    """

    memory_size: int
    max_size: int
    keys: list[str] = field(default_factory=list)
    durable_size: int = 0
    negative_size: int = 0
    fast_hits: int = 0
    durable_hits: int = 0
    misses: int = 0
    in_flight: int = 0

    @property
    def hit_rate(self) -> float:
        """Share of reads served from either store."""
        total = self.fast_hits + self.durable_hits + self.misses
        if total == 0:
            return 0.0
        return (self.fast_hits + self.durable_hits) / total
