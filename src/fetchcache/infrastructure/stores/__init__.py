"""Keyed stores: in-process, durable and hybrid."""

from fetchcache.infrastructure.stores.durable_store import DurableStore
from fetchcache.infrastructure.stores.hybrid_store import HybridStore
from fetchcache.infrastructure.stores.ttl_store import TTLStore

__all__ = ["DurableStore", "HybridStore", "TTLStore"]
