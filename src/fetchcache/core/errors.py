"""Error taxonomy for fetchcache.

Fetch errors describe why a network call did not produce usable data and
end up on ``FetchState.error``. Persistence errors describe a failing
durable storage medium; they are always swallowed at the DurableStore
boundary and never reach a subscriber.
"""

from typing import Any


class FetchError(Exception):
    """Base class for errors surfaced through FetchState."""

    pass


class TransportError(FetchError):
    """The network call never produced a response.

    Covers DNS failures, refused connections and timeouts. There is no
    status code, so it is always classified as retryable.
    """

    status: int | None = None


class HttpError(FetchError):
    """A response arrived with a non-2xx status code."""

    def __init__(
        self,
        status: int,
        message: str | None = None,
        data: Any | None = None,
    ) -> None:
        """Initialize the HTTP error.

        Args:
            status: The HTTP status code of the response.
            message: Human readable message. Defaults to ``HTTP <status>``.
            data: Decoded error body, if the server sent one.
        """
        self.status = status
        self.message = message or f"HTTP {status}"
        self.data = data
        super().__init__(self.message)


class ParseError(FetchError):
    """A 2xx response whose body could not be decoded."""

    status: int | None = None


class SuppressedError(FetchError):
    """State served from a negative record instead of a network call."""

    def __init__(self, key: str, final: bool = False) -> None:
        self.key = key
        self.final = final
        message = (
            "API request failed permanently"
            if final
            else "API temporarily unavailable"
        )
        super().__init__(message)


class PersistenceError(Exception):
    """A durable storage medium failed to read or write."""

    pass


class StorageQuotaExceededError(PersistenceError):
    """The storage medium has no room left for the write."""

    pass


class StorageUnavailableError(PersistenceError):
    """The storage medium is disabled or unreachable."""

    pass
