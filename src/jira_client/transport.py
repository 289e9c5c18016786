"""HTTP transport used to reach the Jira REST API.

The enrichment engine only depends on the HttpTransport protocol so that a
host application can hand in its own proxy. HttpxTransport is the default
implementation, built on httpx.AsyncClient so that many issue fetches can be
in flight on a single event loop.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from .errors import APIUnreachableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code and raw body of one HTTP exchange."""
    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """True for 2xx responses."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            ValueError: If the body is not valid JSON
        """
        return json.loads(self.body.decode("utf-8"))


class HttpTransport(Protocol):
    """Anything that can perform one HTTP request asynchronously."""

    async def request(
        self,
        url: str,
        method: str,
        headers: Dict[str, str],
    ) -> TransportResponse:
        ...


class HttpxTransport:
    """HttpTransport backed by a shared httpx.AsyncClient.

    Transport-level failures (DNS, refused connection, timeouts) are
    translated to APIUnreachableError; HTTP status handling is left to the
    caller.

    Example:
        >>> async with HttpxTransport(timeout=10) as transport:
        ...     response = await transport.request(url, "GET", headers)
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds
            client: Pre-built client (tests pass one with an httpx.MockTransport)
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        url: str,
        method: str,
        headers: Dict[str, str],
    ) -> TransportResponse:
        """Perform one HTTP request.

        Raises:
            APIUnreachableError: If the server could not be reached or timed out
        """
        try:
            response = await self._client.request(method, url, headers=headers)
        except httpx.TimeoutException as e:
            raise APIUnreachableError(endpoint=_host_of(url), reason="request timed out") from e
        except httpx.TransportError as e:
            raise APIUnreachableError(endpoint=_host_of(url), reason=type(e).__name__) from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return TransportResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _host_of(url: str) -> str:
    try:
        return httpx.URL(url).host or url
    except httpx.InvalidURL:
        return url
