"""fetchcache - client-side cache and fetch orchestration.

A bounded TTL store layered over a durable store, a read-through
controller with negative caching of failed requests, and a background
sweeper, for asyncio front ends consuming an HTTP API.

Example:
    from fetchcache import CacheService, HttpxTransport

    transport = HttpxTransport(base_url="https://api.example.com")

    async with CacheService(transport=transport) as service:
        orchestrator = service.orchestrator("/api/places/recommended?limit=8")
        orchestrator.subscribe(render)
        await orchestrator.activate()

        if orchestrator.state.is_final_error:
            ...  # will not retry until force_refetch()

        await orchestrator.force_refetch()

Durable storage across restarts:
    from fetchcache import CacheService, FileStorage

    service = CacheService(storage=FileStorage("var/places-cache.json"))
"""

from fetchcache.core.entities import (
    CacheConfig,
    CacheEntry,
    CacheKey,
    CacheStats,
    FetchState,
)
from fetchcache.core.errors import (
    FetchError,
    HttpError,
    ParseError,
    PersistenceError,
    StorageQuotaExceededError,
    StorageUnavailableError,
    SuppressedError,
    TransportError,
)
from fetchcache.core.interfaces import (
    IKeyBuilder,
    ISerializer,
    IStorage,
    IStore,
    ITransport,
    TransportResponse,
)
from fetchcache.core.services import (
    BackgroundSweeper,
    CacheService,
    ErrorClassifier,
    FetchOrchestrator,
    NegativeCache,
    RequestCoalescer,
    Retryability,
    classify_status,
)
from fetchcache.decorators import cached, configure, invalidates
from fetchcache.infrastructure import (
    DefaultKeyBuilder,
    DurableStore,
    FileStorage,
    HttpxTransport,
    HybridStore,
    JsonSerializer,
    MemoryStorage,
    SerializationError,
    TTLStore,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "CacheStats",
    "FetchState",
    # Errors
    "FetchError",
    "HttpError",
    "ParseError",
    "PersistenceError",
    "StorageQuotaExceededError",
    "StorageUnavailableError",
    "SuppressedError",
    "TransportError",
    "SerializationError",
    # Core interfaces
    "IKeyBuilder",
    "ISerializer",
    "IStorage",
    "IStore",
    "ITransport",
    "TransportResponse",
    # Core services
    "BackgroundSweeper",
    "CacheService",
    "ErrorClassifier",
    "FetchOrchestrator",
    "NegativeCache",
    "RequestCoalescer",
    "Retryability",
    "classify_status",
    # Infrastructure implementations
    "DefaultKeyBuilder",
    "DurableStore",
    "FileStorage",
    "HttpxTransport",
    "HybridStore",
    "JsonSerializer",
    "MemoryStorage",
    "TTLStore",
    # Decorators
    "cached",
    "invalidates",
    "configure",
]
