"""
Pytest configuration and shared fixtures for fetch_middleware tests.
"""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from fetch_middleware.transport import HttpxTransport


class MockStore:
    """Minimal store applying middlewares and recording forwarded actions.

    Every action reaching the end of the middleware chain is recorded in
    order. ``dispatch`` re-enters the whole chain, so lifecycle actions
    dispatched by a middleware are recorded too.
    """

    def __init__(self, middlewares: list[Any], state: Any = None) -> None:
        self.state = state if state is not None else {}
        self.actions: list[Any] = []

        dispatch: Callable[[Any], Any] = self._record
        for middleware in reversed(middlewares):
            dispatch = middleware(self)(dispatch)
        self._dispatch = dispatch

    def _record(self, action: Any) -> Any:
        self.actions.append(action)
        return action

    def dispatch(self, action: Any) -> Any:
        return self._dispatch(action)

    def get_state(self) -> Any:
        return self.state

    def get_actions(self) -> list[Any]:
        return list(self.actions)


@pytest.fixture
def make_store() -> Callable[..., MockStore]:
    """Factory for mock stores wired with the given middlewares."""

    def factory(*middlewares: Any, state: Any = None) -> MockStore:
        return MockStore(list(middlewares), state=state)

    return factory


@pytest_asyncio.fixture
async def make_transport() -> AsyncIterator[
    Callable[[Callable[[httpx.Request], httpx.Response]], HttpxTransport]
]:
    """Factory for transports answering through an httpx.MockTransport handler.

    Clients created by the factory are closed after the test.
    """
    clients: list[httpx.AsyncClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> HttpxTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return HttpxTransport(client=client)

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def foo_get_action() -> dict[str, Any]:
    """A GET request action against an absolute URL."""
    return {
        "type": "FOO_GET",
        "meta": {
            "type": "@api",
            "url": "http://example.com/foo",
        },
    }
