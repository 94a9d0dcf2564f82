"""Domain entities for fetchcache."""

from fetchcache.core.entities.cache_config import (
    DEFAULT_FINAL_STATUS_CODES,
    CacheConfig,
)
from fetchcache.core.entities.cache_entry import CacheEntry, Clock, ttl_seconds
from fetchcache.core.entities.cache_key import CacheKey
from fetchcache.core.entities.cache_stats import CacheStats
from fetchcache.core.entities.fetch_state import FetchState

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheKey",
    "CacheStats",
    "Clock",
    "DEFAULT_FINAL_STATUS_CODES",
    "FetchState",
    "ttl_seconds",
]
