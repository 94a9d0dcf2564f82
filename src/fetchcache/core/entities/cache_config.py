"""Cache configuration entity."""

from dataclasses import dataclass, field
from datetime import timedelta

DEFAULT_FINAL_STATUS_CODES = frozenset({400, 401, 403, 404, 405, 410, 422})


@dataclass
class CacheConfig:
    """Cache configuration.

    Provides configuration options for the caching system, including
    retention policies for the fast and durable stores, negative-cache
    TTLs, size limits and the sweeper interval.

    Retention:
        ``default_ttl`` applies to the fast in-process store when a
        caller does not pass a TTL. ``durable_ttl`` applies to the
        durable store. A value found only in the durable store is copied
        back into the fast store for ``refill_ttl``.

    Negative caching:
        Any failure is remembered for ``transient_error_ttl``. Failures
        whose status is in ``final_status_codes`` are also remembered
        for ``final_error_ttl`` and are not retried without a forced
        refresh.
    """

    max_size: int = 100
    eviction: str = "fifo"
    key_prefix: str = "app_cache_"

    default_ttl: timedelta = timedelta(minutes=5)
    durable_ttl: timedelta = timedelta(days=1)
    refill_ttl: timedelta = timedelta(minutes=5)

    transient_error_ttl: timedelta = timedelta(seconds=30)
    final_error_ttl: timedelta = timedelta(hours=1)
    final_status_codes: frozenset[int] = field(
        default_factory=lambda: DEFAULT_FINAL_STATUS_CODES
    )

    # Background sweeper
    sweep_interval: timedelta = timedelta(seconds=60)

    # Share one network call between concurrent orchestrators
    coalesce_requests: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_size <= 0:
            raise ValueError("max_size must be positive")
        if self.eviction not in ("fifo", "lru"):
            raise ValueError(f"Unknown eviction policy: {self.eviction!r}")
        for name in (
            "default_ttl",
            "durable_ttl",
            "refill_ttl",
            "transient_error_ttl",
            "final_error_ttl",
            "sweep_interval",
        ):
            if getattr(self, name) <= timedelta(0):
                raise ValueError(f"{name} must be positive")
        self.final_status_codes = frozenset(self.final_status_codes)
