"""Fetch-shaped HTTP transport for the fetch middleware.

The middleware talks to the network through a ``Transport``: an async
callable taking the endpoint and a RequestConfig and returning a
``FetchResponse``. The default implementation is backed by a shared
``httpx.AsyncClient``.

Examples:
    Using the default transport::

        transport = HttpxTransport(timeout_seconds=10)
        middleware = create_fetch_middleware(transport=transport)
        ...
        await transport.aclose()

    Testing against a mocked endpoint::

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="OK!")

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpxTransport(client=client)
"""

import asyncio
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import httpx

from fetch_middleware.models import RequestConfig


@runtime_checkable
class FetchResponse(Protocol):
    """Response interface the outcome reporter relies on."""

    @property
    def ok(self) -> bool:
        """True when the status is in the 2xx range."""
        ...

    @property
    def status(self) -> int:
        """HTTP status code."""
        ...

    @property
    def status_text(self) -> str:
        """HTTP reason phrase."""
        ...

    @property
    def headers(self) -> Mapping[str, str]:
        """Response headers supporting ``get(name)``."""
        ...

    async def json(self) -> Any:
        """Decode the body as JSON."""
        ...

    async def text(self) -> str:
        """Decode the body as text."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Async callable issuing one HTTP request."""

    async def __call__(self, url: str, request: RequestConfig) -> FetchResponse:
        """Send ``request`` to ``url`` and return the response."""
        ...


class HttpxFetchResponse:
    """FetchResponse adapter over ``httpx.Response``.

    Attributes:
        raw: The wrapped httpx response
    """

    def __init__(self, raw: httpx.Response) -> None:
        self.raw = raw

    @property
    def ok(self) -> bool:
        return self.raw.is_success

    @property
    def status(self) -> int:
        return self.raw.status_code

    @property
    def status_text(self) -> str:
        return self.raw.reason_phrase

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    async def json(self) -> Any:
        await self.raw.aread()
        return self.raw.json()

    async def text(self) -> str:
        await self.raw.aread()
        return self.raw.text


class HttpxTransport:
    """Transport backed by a shared ``httpx.AsyncClient``.

    The client is created on first use unless one is injected. An injected
    client stays owned by the caller and is not closed by ``aclose``.

    Attributes:
        timeout_seconds: Timeout of a client created by this transport
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._lock = asyncio.Lock()

    async def _ensure(self) -> httpx.AsyncClient:
        async with self._lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self.timeout_seconds,
                    follow_redirects=True,
                )
            return self._client

    async def __call__(self, url: str, request: RequestConfig) -> HttpxFetchResponse:
        """Send the request and wrap the response.

        Redirects are followed unless ``request.options`` sets
        ``follow_redirects``.

        Raises:
            httpx.HTTPError: If no response could be obtained
        """
        client = await self._ensure()
        response = await client.request(
            request.method,
            url,
            headers=request.headers,
            content=request.body,
            **{"follow_redirects": True, **request.options},
        )
        return HttpxFetchResponse(response)

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
