"""Unit tests for jira_client.transport module."""

import httpx
import pytest

from src.jira_client.errors import APIUnreachableError
from src.jira_client.transport import HttpxTransport, TransportResponse


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestTransportResponse:
    """Test cases for TransportResponse."""

    def test_ok_for_2xx(self):
        assert TransportResponse(200).ok is True
        assert TransportResponse(204).ok is True
        assert TransportResponse(301).ok is False
        assert TransportResponse(500).ok is False

    def test_json_decodes_body(self):
        response = TransportResponse(200, b'{"key": "PROJ-7"}')
        assert response.json() == {"key": "PROJ-7"}

    def test_json_raises_value_error_on_garbage(self):
        with pytest.raises(ValueError):
            TransportResponse(200, b"<html>").json()


class TestHttpxTransport:
    """Test cases for HttpxTransport."""

    @pytest.mark.asyncio
    async def test_request_passes_method_and_headers(self):
        """The request carries the method, URL and headers it was given."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"key": "PROJ-7"})

        transport = HttpxTransport(client=_client(handler))
        response = await transport.request(
            url="https://x.atlassian.net/rest/api/2/issue/PROJ-7",
            method="GET",
            headers={"Authorization": "Basic abc", "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"key": "PROJ-7"}
        assert seen == {
            "method": "GET",
            "url": "https://x.atlassian.net/rest/api/2/issue/PROJ-7",
            "auth": "Basic abc",
        }

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self):
        """HTTP error statuses are left to the caller."""
        transport = HttpxTransport(client=_client(lambda request: httpx.Response(500)))

        response = await transport.request("https://x.atlassian.net/", "GET", {})

        assert response.status_code == 500
        assert response.ok is False

    @pytest.mark.asyncio
    async def test_connect_error_translated(self):
        """Connection failures become APIUnreachableError."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxTransport(client=_client(handler))

        with pytest.raises(APIUnreachableError) as exc_info:
            await transport.request("https://x.atlassian.net/rest/api/2/issue/A-1", "GET", {})

        assert exc_info.value.endpoint == "x.atlassian.net"

    @pytest.mark.asyncio
    async def test_timeout_translated(self):
        """Timeouts become APIUnreachableError."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        transport = HttpxTransport(client=_client(handler))

        with pytest.raises(APIUnreachableError) as exc_info:
            await transport.request("https://x.atlassian.net/", "GET", {})

        assert exc_info.value.reason == "request timed out"

    @pytest.mark.asyncio
    async def test_does_not_close_injected_client(self):
        """A client handed in by the caller stays open after aclose()."""
        client = _client(lambda request: httpx.Response(200))
        async with HttpxTransport(client=client):
            pass

        assert client.is_closed is False
        await client.aclose()
