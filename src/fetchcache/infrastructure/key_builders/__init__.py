"""Cache key builders."""

from fetchcache.infrastructure.key_builders.default import DefaultKeyBuilder

__all__ = ["DefaultKeyBuilder"]
