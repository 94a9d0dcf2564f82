"""Tests for CacheService."""

from unittest.mock import AsyncMock

import pytest
from fakes import FakeClock, FakeTransport, json_response

from fetchcache import (
    CacheConfig,
    CacheService,
    CacheStats,
    HttpxTransport,
    MemoryStorage,
)

PLACES = [{"id": "p1", "name": "Gyeongbokgung"}]


class TestCacheService:
    """Tests for CacheService."""

    @pytest.mark.asyncio
    async def test_fetch(self, cache_service: CacheService, transport: FakeTransport) -> None:
        """Test one-shot fetching."""
        state = await cache_service.fetch("/api/places")

        assert state.data == PLACES
        assert transport.call_count == 1

        await cache_service.fetch("/api/places")
        assert transport.call_count == 1

    @pytest.mark.asyncio
    async def test_invalidate(self, cache_service: CacheService, transport: FakeTransport) -> None:
        """Test that invalidation forces the next fetch to the network."""
        await cache_service.fetch("/api/places", {"headers": {"lang": "ko"}})

        assert cache_service.invalidate("/api/places", {"headers": {"lang": "ko"}})
        assert not cache_service.invalidate("/api/places", {"headers": {"lang": "ko"}})

        await cache_service.fetch("/api/places", {"headers": {"lang": "ko"}})
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_invalidate_clears_failure_records(self, clock: FakeClock) -> None:
        """Test that invalidation also forgets failures."""
        transport = FakeTransport(json_response({}, status=404), json_response(PLACES))
        service = CacheService(transport=transport, storage=MemoryStorage(), clock=clock)

        first = await service.fetch("/api/places/p1")
        assert first.is_final_error

        service.invalidate("/api/places/p1")
        second = await service.fetch("/api/places/p1")

        assert second.data == PLACES
        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_clear(self, cache_service: CacheService, storage: MemoryStorage) -> None:
        """Test that clear empties every store."""
        await cache_service.fetch("/api/places")
        cache_service.negative_cache.record_failure("other", final=True)

        cache_service.clear()

        stats = cache_service.stats()
        assert stats.memory_size == 0
        assert stats.durable_size == 0
        assert stats.negative_size == 0
        assert len(storage) == 0

    @pytest.mark.asyncio
    async def test_stats(self, cache_service: CacheService) -> None:
        """Test statistics after a miss and a hit."""
        state = await cache_service.fetch("/api/places")
        await cache_service.fetch("/api/places")
        key = cache_service.key_builder.build("/api/places", None)

        stats = cache_service.stats()

        assert isinstance(stats, CacheStats)
        assert state.data == PLACES
        assert stats.memory_size == 1
        assert stats.max_size == 100
        assert stats.keys == [key]
        assert stats.durable_size == 1
        assert stats.fast_hits == 1
        assert stats.misses == 1
        assert stats.hit_rate == 0.5
        assert stats.in_flight == 0

    @pytest.mark.asyncio
    async def test_reload_served_from_durable_storage(
        self, transport: FakeTransport, storage: MemoryStorage, clock: FakeClock
    ) -> None:
        """Test that a new service over the same storage serves cached data."""
        first = CacheService(transport=transport, storage=storage, clock=clock)
        await first.fetch("/api/places")

        reloaded = CacheService(transport=transport, storage=storage, clock=clock)
        state = await reloaded.fetch("/api/places")

        assert state.data == PLACES
        assert transport.call_count == 1
        assert reloaded.stats().durable_hits == 1

    @pytest.mark.asyncio
    async def test_services_are_isolated(self, transport: FakeTransport, clock: FakeClock) -> None:
        """Test that separate services share no state."""
        a = CacheService(transport=transport, clock=clock)
        b = CacheService(transport=transport, clock=clock)

        await a.fetch("/api/places")
        await b.fetch("/api/places")

        assert transport.call_count == 2

    @pytest.mark.asyncio
    async def test_lru_config(self, transport: FakeTransport, clock: FakeClock) -> None:
        """Test that eviction policy and size come from the config."""
        service = CacheService(
            transport=transport,
            config=CacheConfig(max_size=2, eviction="lru"),
            clock=clock,
        )

        assert service.store.fast.eviction == "lru"
        assert service.store.fast.maxsize == 2


class TestCacheServiceLifecycle:
    """Tests for start/stop."""

    @pytest.mark.asyncio
    async def test_context_manager_drives_sweeper(self, cache_service: CacheService) -> None:
        """Test that the sweeper runs inside the context."""
        async with cache_service as service:
            assert service.sweeper.running

        assert not cache_service.sweeper.running

    @pytest.mark.asyncio
    async def test_start_sweeps_durable_storage(
        self, storage: MemoryStorage, transport: FakeTransport, clock: FakeClock
    ) -> None:
        """Test that expired durable records are purged on start."""
        first = CacheService(transport=transport, storage=storage, clock=clock)
        await first.fetch("/api/places")
        clock.advance(2 * 24 * 3600)

        service = CacheService(transport=transport, storage=storage, clock=clock)
        await service.start()
        await service.stop()

        assert len(storage) == 0

    @pytest.mark.asyncio
    async def test_stop_keeps_injected_transport_open(self) -> None:
        """Test that a caller-owned transport is not closed."""
        transport = AsyncMock()
        service = CacheService(transport=transport)

        await service.start()
        await service.stop()

        transport.close.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_closes_owned_transport(self) -> None:
        """Test that the default transport is created and closed."""
        service = CacheService()
        transport = service.transport

        assert isinstance(transport, HttpxTransport)
        await service.start()
        await service.stop()

        assert transport.closed
