"""Scenario 5: Transport Failure Conformance Tests

This module tests requests that never produce a response:
- A FAILURE action with a TransportError is dispatched
- The dispatch result rejects with the same error
- The original transport exception is kept as the cause
- An application crash surfaced as a 500 is an HTTP failure instead
"""

import httpx
import pytest
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.routing import Route

from fetch_middleware import HTTPError, TransportError, create_fetch_middleware
from fetch_middleware.transport import HttpxTransport


async def crash(request: Request):
    raise RuntimeError("database unavailable")


@pytest.fixture
def app() -> Starlette:
    return Starlette(routes=[Route("/crash", crash)])


ACTION = {
    "type": "CRASH_GET",
    "meta": {"type": "@api", "url": "http://example.com/crash", "attempt": 1},
}


class TestTransportFailure:
    """Tests for failures without a response."""

    @pytest.mark.asyncio
    async def test_raised_app_exception(self, make_store, app):
        transport = HttpxTransport(
            client=httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
        )
        store = make_store(create_fetch_middleware(transport=transport))

        with pytest.raises(TransportError) as exc_info:
            await store.dispatch(ACTION)

        error = exc_info.value
        assert isinstance(error.cause, RuntimeError)
        assert "database unavailable" in error.message
        assert store.get_actions()[1:] == [
            {"type": "@api/CRASH_GET/STARTED"},
            {"type": "@api/CRASH_GET/FAILURE", "payload": error, "meta": {"attempt": 1}},
        ]

    @pytest.mark.asyncio
    async def test_connect_error(self, make_store, make_transport):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        store = make_store(create_fetch_middleware(transport=make_transport(refuse)))

        with pytest.raises(TransportError) as exc_info:
            await store.dispatch(ACTION)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        failures = [a for a in store.get_actions() if a["type"] == "@api/CRASH_GET/FAILURE"]
        assert len(failures) == 1

    @pytest.mark.asyncio
    async def test_app_exception_as_server_error(self, make_store, app):
        transport = HttpxTransport(
            client=httpx.AsyncClient(
                transport=httpx.ASGITransport(app=app, raise_app_exceptions=False)
            )
        )
        store = make_store(create_fetch_middleware(transport=transport))

        with pytest.raises(HTTPError) as exc_info:
            await store.dispatch(ACTION)

        assert exc_info.value.code == 500
        assert store.get_actions()[-1]["type"] == "@api/CRASH_GET/FAILURE"
