"""HTTP transports."""

from fetchcache.infrastructure.transports.httpx_transport import HttpxTransport

__all__ = ["HttpxTransport"]
