"""Tests for HttpxTransport."""

import json

import httpx
import pytest

from fetchcache.core.errors import TransportError
from fetchcache.infrastructure.transports.httpx_transport import HttpxTransport


def make_transport(handler) -> HttpxTransport:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://api.example.com",
    )
    return HttpxTransport(client=client)


class TestHttpxTransport:
    """Tests for HttpxTransport."""

    @pytest.mark.asyncio
    async def test_successful_get(self) -> None:
        """Test that a 200 response is returned with its body."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/places/recommended"
            return httpx.Response(200, json=[{"id": "p1"}])

        transport = make_transport(handler)
        response = await transport.request("/api/places/recommended")

        assert response.ok
        assert response.status_code == 200
        assert json.loads(response.body) == [{"id": "p1"}]
        assert response.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self) -> None:
        """Test that a 404 is a response, not an exception."""
        transport = make_transport(lambda request: httpx.Response(404, json={"message": "Not found"}))

        response = await transport.request("/api/places/999")

        assert response.status_code == 404
        assert not response.ok

    @pytest.mark.asyncio
    async def test_json_body_and_headers(self) -> None:
        """Test that mapping bodies are sent as JSON with extra headers."""
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["lang"] = request.headers.get("accept-language")
            return httpx.Response(201, json={"ok": True})

        transport = make_transport(handler)
        await transport.request(
            "/api/user/bookmarks/p1",
            method="post",
            headers={"Accept-Language": "ko"},
            body={"folder": "seoul"},
        )

        assert seen == {"method": "POST", "body": {"folder": "seoul"}, "lang": "ko"}

    @pytest.mark.asyncio
    async def test_raw_body(self) -> None:
        """Test that bytes bodies are sent untouched."""
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["content"] = request.content
            return httpx.Response(200)

        await make_transport(handler).request("/upload", method="PUT", body=b"raw")

        assert seen["content"] == b"raw"

    @pytest.mark.asyncio
    async def test_connection_error_becomes_transport_error(self) -> None:
        """Test that a failure without a response raises TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            await make_transport(handler).request("/api/places")

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self) -> None:
        """Test that timeouts raise TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            await make_transport(handler).request("/api/places")

    def test_default_headers(self) -> None:
        """Test default JSON content type and bearer token."""
        transport = HttpxTransport(base_url="https://api.example.com", token="abc")

        headers = transport._client.headers
        assert headers["Content-Type"] == "application/json"
        assert headers["Authorization"] == "Bearer abc"

    @pytest.mark.asyncio
    async def test_close_owned_client_only(self) -> None:
        """Test that an injected client is left open."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.close()
        assert not client.is_closed

        owned = HttpxTransport()
        async with owned:
            pass
        assert owned._client.is_closed

        await client.aclose()
