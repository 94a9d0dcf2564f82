"""Key builder interface."""

from collections.abc import Mapping
from typing import Any, Protocol


class IKeyBuilder(Protocol):
    """Contract for building cache keys from request parameters.

    Key builders are responsible for creating unique, deterministic
    cache keys. Logically identical requests must yield identical keys;
    the negative cache and request coalescing depend on it.
    """

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
        ...
