"""HTTP transport interface."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of a network call that produced a response."""

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300


class ITransport(Protocol):
    """Contract for the HTTP primitive the orchestrator consumes.

    Given a URL and request parameters it either returns a response
    (whatever its status) or raises ``TransportError`` when no response
    was produced at all.
    """

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any | None = None,
    ) -> TransportResponse:
        """Issue a request.

        Args:
            url: Absolute URL, or a path relative to the transport base.
            method: HTTP method.
            headers: Extra request headers.
            body: Request body. Mappings and lists are sent as JSON,
                bytes and strings as-is.

        Returns:
            The response.

        Raises:
            TransportError: If the request never produced a response.
        """
        ...
