"""httpx-based transport implementation."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from fetchcache.core.errors import TransportError
from fetchcache.core.interfaces.transport import TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Transport issuing requests through an ``httpx.AsyncClient``.

    Non-2xx responses are returned, not raised; only failures that never
    produced a response become ``TransportError``.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        headers: Mapping[str, str] | None = None,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Base URL relative request URLs are resolved against.
            timeout: Request timeout in seconds.
            headers: Default headers sent with every request.
            token: Optional bearer token for the Authorization header.
            client: Optional preconfigured client. The transport does not
                close a client it did not create.
        """
        default_headers = {"Content-Type": "application/json"}
        default_headers.update(headers or {})
        if token:
            default_headers["Authorization"] = f"Bearer {token}"

        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers=default_headers,
        )

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any | None = None,
    ) -> TransportResponse:
        """Issue a request.

        Raises:
            TransportError: If the request never produced a response.
        """
        kwargs: dict[str, Any] = {"headers": dict(headers or {})}
        if isinstance(body, (bytes, str)):
            kwargs["content"] = body
        elif body is not None:
            kwargs["json"] = body

        try:
            response = await self._client.request(method.upper(), url, **kwargs)
        except httpx.TransportError as e:
            logger.debug("Transport failure for %s %s: %s", method, url, e)
            raise TransportError(f"Network error: {e}") from e

        return TransportResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Async context manager exit."""
        await self.close()
