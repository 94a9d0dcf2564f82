"""Default key builder implementation."""

from collections.abc import Mapping
from typing import Any

from fetchcache.core.entities.cache_key import CacheKey
from fetchcache.utils.hashing import canonical_json, hash_value


class DefaultKeyBuilder:
    """Default key builder.

    Creates deterministic cache keys of the form
    ``<url>:<canonical JSON of options>``. With ``hash_options`` the
    options part is replaced by a SHA-256 digest, which keeps keys short
    when requests carry large bodies.
    """

    def __init__(
        self,
        prefix: str | None = None,
        hash_options: bool = False,
    ) -> None:
        """Initialize the key builder.

        Args:
            prefix: Optional prefix for all cache keys.
            hash_options: Whether to hash the serialized options.
        """
        self._prefix = prefix
        self._hash_options = hash_options

    def build(
        self,
        url: str,
        options: Mapping[str, Any] | None = None,
    ) -> str:
        """Build unique cache key for a request.

        Args:
            url: The resource locator.
            options: Request options (method, headers, body, ...).

        Returns:
            A unique string key for caching the response.
        """
        serialize = hash_value if self._hash_options else canonical_json
        key = CacheKey.from_components(
            url=url,
            options=options,
            prefix=self._prefix,
            serialize=serialize,
        )
        return str(key)
