"""Pytest configuration for fetchcache tests."""

import pytest
from fakes import FakeClock, FakeTransport, json_response

from fetchcache import CacheConfig, CacheService, MemoryStorage


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock."""
    return FakeClock()


@pytest.fixture
def storage() -> MemoryStorage:
    """Provide an in-memory durable storage medium."""
    return MemoryStorage()


@pytest.fixture
def transport() -> FakeTransport:
    """Provide a transport answering 200 with a small JSON body."""
    return FakeTransport(json_response([{"id": "p1", "name": "Gyeongbokgung"}]))


@pytest.fixture
def cache_service(
    transport: FakeTransport,
    storage: MemoryStorage,
    clock: FakeClock,
) -> CacheService:
    """Create a cache service wired to fakes."""
    return CacheService(
        transport=transport,
        config=CacheConfig(),
        storage=storage,
        clock=clock,
    )


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import fetchcache.decorators

    original_service = fetchcache.decorators._cache_service

    yield

    fetchcache.decorators._cache_service = original_service
