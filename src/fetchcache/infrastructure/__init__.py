"""Infrastructure layer implementations for fetchcache."""

from fetchcache.infrastructure.key_builders import DefaultKeyBuilder
from fetchcache.infrastructure.serializers import JsonSerializer, SerializationError
from fetchcache.infrastructure.storage import FileStorage, MemoryStorage
from fetchcache.infrastructure.stores import DurableStore, HybridStore, TTLStore
from fetchcache.infrastructure.transports import HttpxTransport

__all__ = [
    "DefaultKeyBuilder",
    "DurableStore",
    "FileStorage",
    "HttpxTransport",
    "HybridStore",
    "JsonSerializer",
    "MemoryStorage",
    "SerializationError",
    "TTLStore",
]
