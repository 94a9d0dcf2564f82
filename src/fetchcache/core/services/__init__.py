"""Domain services for fetchcache."""

from fetchcache.core.services.cache_service import CacheService
from fetchcache.core.services.error_classifier import (
    ErrorClassifier,
    Retryability,
    classify_status,
)
from fetchcache.core.services.fetch_orchestrator import (
    FetchOrchestrator,
    FetchOutcome,
    http_error_from_response,
    parse_response,
)
from fetchcache.core.services.negative_cache import NegativeCache
from fetchcache.core.services.request_coalescer import RequestCoalescer
from fetchcache.core.services.sweeper import BackgroundSweeper

__all__ = [
    "BackgroundSweeper",
    "CacheService",
    "ErrorClassifier",
    "FetchOrchestrator",
    "FetchOutcome",
    "NegativeCache",
    "RequestCoalescer",
    "Retryability",
    "classify_status",
    "http_error_from_response",
    "parse_response",
]
