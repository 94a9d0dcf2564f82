"""Cache key value object."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheKey:
    """Immutable cache key value object.

    Identifies a logical resource (its URL) together with the request
    options used to fetch it. Two requests with the same URL and
    logically identical options always produce the same string.
    """

    url: str
    options: str
    prefix: str | None = None

    def __str__(self) -> str:
        """Return the full cache key string.

        Returns:
            The complete cache key as a string.
        """
        parts = [self.url, self.options]
        if self.prefix:
            parts.insert(0, self.prefix)
        return ":".join(parts)

    @classmethod
    def from_components(
        cls,
        url: str,
        options: Mapping[str, Any] | None = None,
        prefix: str | None = None,
        serialize: Callable[[Any], str] | None = None,
    ) -> "CacheKey":
        """Create a CacheKey from a URL and request options.

        Args:
            url: The resource locator.
            options: Request options (method, headers, body, ...).
            prefix: Optional key namespace.
            serialize: Optional serializer for the options, defaults to
                canonical JSON.

        Returns:
            A new CacheKey instance.
        """
        from fetchcache.utils.hashing import canonical_json

        serializer = serialize or canonical_json
        return cls(url=url, options=serializer(dict(options or {})), prefix=prefix)
