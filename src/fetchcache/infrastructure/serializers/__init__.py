"""Serializers for durable records."""

from fetchcache.infrastructure.serializers.json import JsonSerializer, SerializationError

__all__ = ["JsonSerializer", "SerializationError"]
