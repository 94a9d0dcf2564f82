"""Core domain layer for fetchcache."""

from fetchcache.core.entities import CacheConfig, CacheEntry, CacheKey, FetchState
from fetchcache.core.errors import (
    FetchError,
    HttpError,
    ParseError,
    PersistenceError,
    TransportError,
)
from fetchcache.core.interfaces import (
    IKeyBuilder,
    ISerializer,
    IStorage,
    IStore,
    ITransport,
)
from fetchcache.core.services import CacheService, FetchOrchestrator

__all__ = [
    # Entities
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "FetchState",
    # Errors
    "FetchError",
    "HttpError",
    "ParseError",
    "PersistenceError",
    "TransportError",
    # Interfaces
    "IKeyBuilder",
    "ISerializer",
    "IStorage",
    "IStore",
    "ITransport",
    # Services
    "CacheService",
    "FetchOrchestrator",
]
