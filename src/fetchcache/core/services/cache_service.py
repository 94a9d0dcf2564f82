"""Cache service - composition root for the cache and fetch layer."""

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from fetchcache.core.entities.cache_config import CacheConfig
from fetchcache.core.entities.cache_entry import Clock
from fetchcache.core.entities.cache_stats import CacheStats
from fetchcache.core.entities.fetch_state import FetchState
from fetchcache.core.interfaces.key_builder import IKeyBuilder
from fetchcache.core.interfaces.storage import IStorage
from fetchcache.core.interfaces.transport import ITransport
from fetchcache.core.services.error_classifier import ErrorClassifier
from fetchcache.core.services.fetch_orchestrator import FetchOrchestrator, FetchOutcome
from fetchcache.core.services.negative_cache import NegativeCache
from fetchcache.core.services.request_coalescer import RequestCoalescer
from fetchcache.core.services.sweeper import BackgroundSweeper
from fetchcache.infrastructure.key_builders.default import DefaultKeyBuilder
from fetchcache.infrastructure.storage.memory import MemoryStorage
from fetchcache.infrastructure.stores.durable_store import DurableStore
from fetchcache.infrastructure.stores.hybrid_store import HybridStore
from fetchcache.infrastructure.stores.ttl_store import TTLStore

logger = logging.getLogger(__name__)


class CacheService:
    """Service that wires the cache layer together.

    This is the main entry point: it owns one cache scope (fast store,
    durable store, negative cache, in-flight request map and sweeper)
    and hands out orchestrators bound to it. Independent services never
    share state, which keeps tests and tenants isolated.
    """

    def __init__(
        self,
        transport: ITransport | None = None,
        config: CacheConfig | None = None,
        *,
        storage: IStorage | None = None,
        fast_store: TTLStore | None = None,
        durable_store: DurableStore | None = None,
        negative_store: TTLStore | None = None,
        key_builder: IKeyBuilder | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the cache service.

        Args:
            transport: HTTP primitive. Defaults to an HttpxTransport
                owned and closed by the service.
            config: Optional cache configuration. Uses defaults if not provided.
            storage: Medium for the durable store, defaults to MemoryStorage.
            fast_store: Optional prebuilt fast store.
            durable_store: Optional prebuilt durable store.
            negative_store: Optional prebuilt store for failure records.
            key_builder: Builds cache keys, defaults to DefaultKeyBuilder.
            clock: Returns the current time in epoch seconds.
        """
        self._config = config or CacheConfig()
        cfg = self._config

        self._owns_transport = transport is None
        if transport is None:
            from fetchcache.infrastructure.transports.httpx_transport import HttpxTransport

            transport = HttpxTransport()
        self._transport = transport

        self._fast = fast_store if fast_store is not None else TTLStore(
            maxsize=cfg.max_size,
            default_ttl=cfg.default_ttl,
            eviction=cfg.eviction,
            clock=clock,
        )
        self._durable = durable_store if durable_store is not None else DurableStore(
            storage if storage is not None else MemoryStorage(),
            prefix=cfg.key_prefix,
            default_ttl=cfg.durable_ttl,
            clock=clock,
        )
        self._store = HybridStore(self._fast, self._durable, refill_ttl=cfg.refill_ttl)

        if negative_store is None:
            negative_store = TTLStore(
                maxsize=cfg.max_size,
                default_ttl=cfg.transient_error_ttl,
                clock=clock,
            )
        self._negative_store = negative_store
        self._negative = NegativeCache(
            negative_store,
            transient_ttl=cfg.transient_error_ttl,
            final_ttl=cfg.final_error_ttl,
        )

        self._key_builder = key_builder or DefaultKeyBuilder()
        self._classifier = ErrorClassifier(cfg.final_status_codes)
        self._coalescer: RequestCoalescer[FetchOutcome] | None = (
            RequestCoalescer() if cfg.coalesce_requests else None
        )
        self._sweeper = BackgroundSweeper(
            [self._fast, negative_store],
            durable=self._durable,
            interval=cfg.sweep_interval,
        )

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def transport(self) -> ITransport:
        return self._transport

    @property
    def store(self) -> HybridStore:
        """The positive cache."""
        return self._store

    @property
    def negative_cache(self) -> NegativeCache:
        return self._negative

    @property
    def key_builder(self) -> IKeyBuilder:
        return self._key_builder

    @property
    def sweeper(self) -> BackgroundSweeper:
        return self._sweeper

    def orchestrator(
        self,
        url: str,
        options: Mapping[str, Any] | None = None,
        ttl: timedelta | float | None = None,
    ) -> FetchOrchestrator:
        """Create an orchestrator bound to this cache scope.

        The orchestrator is not activated; call ``activate`` or use it as
        an async context manager.

        Args:
            url: The resource locator.
            options: Request options.
            ttl: Lifetime of the fetched value in both stores.

        Returns:
            A new FetchOrchestrator.
        """
        return FetchOrchestrator(
            url,
            options,
            ttl,
            store=self._store,
            negative_cache=self._negative,
            transport=self._transport,
            key_builder=self._key_builder,
            classifier=self._classifier,
            coalescer=self._coalescer,
            durable_ttl=self._config.durable_ttl,
        )

    async def fetch(
        self,
        url: str,
        options: Mapping[str, Any] | None = None,
        ttl: timedelta | float | None = None,
    ) -> FetchState:
        """Activate a throwaway orchestrator and return its final state.

        Args:
            url: The resource locator.
            options: Request options.
            ttl: Lifetime of the fetched value in both stores.

        Returns:
            The resulting FetchState.
        """
        async with self.orchestrator(url, options, ttl) as orchestrator:
            return orchestrator.state

    def invalidate(self, url: str, options: Mapping[str, Any] | None = None) -> bool:
        """Drop cached data and failure records for a request.

        Typically called after a mutation that changes the resource.

        Returns:
            True if a cached value was removed.
        """
        return self.invalidate_key(self._key_builder.build(url, options))

    def invalidate_key(self, key: str) -> bool:
        """Drop cached data and failure records for a cache key."""
        self._negative.clear(key)
        removed = self._store.delete(key)
        if removed:
            logger.debug("Invalidated %s", key)
        return removed

    def clear(self) -> None:
        """Clear cached data and failure records."""
        self._store.clear()
        self._negative_store.clear()

    def stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            A CacheStats snapshot.
        """
        fast = self._fast.stats()
        reads = self._store.stats
        return CacheStats(
            memory_size=fast["size"],
            max_size=fast["max_size"],
            keys=fast["keys"],
            durable_size=len(self._durable),
            negative_size=len(self._negative_store.keys()),
            fast_hits=reads["fast_hits"],
            durable_hits=reads["durable_hits"],
            misses=reads["misses"],
            in_flight=len(self._coalescer) if self._coalescer is not None else 0,
        )

    async def start(self) -> None:
        """Start background maintenance."""
        await self._sweeper.start()

    async def stop(self) -> None:
        """Stop background maintenance and release an owned transport."""
        await self._sweeper.stop()
        if self._owns_transport:
            close = getattr(self._transport, "close", None)
            if close is not None:
                await close()

    async def __aenter__(self) -> "CacheService":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.stop()
