"""Core interfaces (Protocol classes) for fetchcache."""

from fetchcache.core.interfaces.key_builder import IKeyBuilder
from fetchcache.core.interfaces.serializer import ISerializer
from fetchcache.core.interfaces.storage import IStorage
from fetchcache.core.interfaces.store import IStore
from fetchcache.core.interfaces.transport import ITransport, TransportResponse

__all__ = [
    "IKeyBuilder",
    "ISerializer",
    "IStorage",
    "IStore",
    "ITransport",
    "TransportResponse",
]
