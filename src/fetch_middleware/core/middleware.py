"""Store middleware turning ``@api`` actions into HTTP requests.

The middleware plugs into a Redux-style dispatch pipeline with the usual
three-stage signature ``middleware(store)(next_)(action)``. Actions whose
``meta.type`` is ``"@api"`` are handled as follows:

1. Forward the original action unchanged with ``next_``
2. Read the state and resolve the auth token
3. Build the endpoint and request configuration
4. Dispatch ``@api/<type>/STARTED``
5. Schedule the request and return the pending ``asyncio.Task``

When the request settles, exactly one of ``@api/<type>/SUCCESS`` or
``@api/<type>/FAILURE`` is dispatched. The task resolves to the parsed body
or raises the same error carried by the FAILURE action. Every other action
is passed to ``next_`` untouched.

Examples:
    Wiring the middleware into a store::

        from fetch_middleware import create_fetch_middleware, select_token

        middleware = create_fetch_middleware(
            token_resolver=select_token("session", "token"),
            base_url="https://api.example.com",
        )
        store = create_store(reducer, apply_middleware(middleware))

        body = await store.dispatch(
            {"type": "USER_GET", "meta": {"type": "@api", "url": "/users/1", "id": 1}}
        )
"""

import asyncio
import time
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from fetch_middleware.actions import Action, action_type_started, create_action, is_fetch_action
from fetch_middleware.config import FetchMiddlewareConfig
from fetch_middleware.core.outcome import report_failure, report_outcome
from fetch_middleware.core.request_builder import build_request
from fetch_middleware.exceptions import (
    FetchMiddlewareError,
    InvalidFetchActionError,
    TransportError,
)
from fetch_middleware.models import FetchMeta, RequestConfig
from fetch_middleware.observability.logging import get_logger
from fetch_middleware.observability.metrics import (
    decrement_in_flight,
    increment_in_flight,
    record_duration,
    record_request,
)
from fetch_middleware.token import TokenResolver, default_token_resolver
from fetch_middleware.transport import HttpxTransport, Transport

logger = get_logger(__name__)

Dispatch = Callable[[Any], Any]


class Store(Protocol):
    """The part of a store the middleware uses."""

    def dispatch(self, action: Any) -> Any:
        """Send an action through the whole pipeline."""
        ...

    def get_state(self) -> Any:
        """Return the current application state."""
        ...


def _elapsed_ms(started_at: float) -> int:
    return int((time.perf_counter() - started_at) * 1000)


class FetchMiddleware:
    """Middleware issuing one HTTP request per fetch-request action.

    Attributes:
        token_resolver: Maps state to a bearer token or None
        base_url: Prefix for relative request URLs
        transport: Fetch-shaped transport issuing the requests
        config: Configuration object
    """

    def __init__(
        self,
        token_resolver: TokenResolver = default_token_resolver,
        base_url: str | None = None,
        transport: Transport | None = None,
        config: FetchMiddlewareConfig | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            token_resolver: Maps state to a bearer token or None
            base_url: Prefix for relative URLs; overrides ``config.base_url``
            transport: Transport to use; defaults to an HttpxTransport
            config: Configuration object; defaults to FetchMiddlewareConfig()
        """
        self.config = config if config is not None else FetchMiddlewareConfig()
        self.token_resolver = token_resolver
        self.base_url = self.config.base_url if base_url is None else base_url
        self.transport: Transport = (
            transport
            if transport is not None
            else HttpxTransport(timeout_seconds=self.config.timeout_seconds)
        )
        self._active_tasks: set[asyncio.Task[Any]] = set()

    def __call__(self, store: Store) -> Callable[[Dispatch], Dispatch]:
        def wrap_next(next_: Dispatch) -> Dispatch:
            def handle(action: Any) -> Any:
                if not is_fetch_action(action):
                    return next_(action)
                return self.process(store, next_, action)

            return handle

        return wrap_next

    def process(self, store: Store, next_: Dispatch, action: Action) -> "asyncio.Task[Any]":
        """Run the request lifecycle for a fetch-request action.

        Must be called from a running event loop. Failures never raise here,
        including a failing token resolver; they surface through the returned
        task and a FAILURE action.

        Args:
            store: Store providing ``dispatch`` and ``get_state``
            next_: Next dispatch function in the pipeline
            action: A fetch-request action

        Returns:
            Task resolving to the parsed response body

        Raises:
            RuntimeError: If no event loop is running
        """
        loop = asyncio.get_running_loop()

        next_(action)

        action_type = action.get("type")
        carried = FetchMeta.carried_meta(action["meta"])
        log = logger.bind(action_type=action_type)

        try:
            token = self._resolve_token(store, action_type)
            endpoint, request = self._prepare(action, action_type, token)
        except InvalidFetchActionError as error:
            store.dispatch(create_action(action_type_started(action_type)))
            return self._track(
                loop.create_task(self._reject(store.dispatch, action_type, error, carried, log))
            )

        log = log.bind(method=request.method, endpoint=endpoint)
        store.dispatch(create_action(action_type_started(action_type)))
        log.debug("fetch.started")

        return self._track(
            loop.create_task(
                self._execute(store.dispatch, action_type, endpoint, request, carried, log)
            )
        )

    def _track(self, task: "asyncio.Task[Any]") -> "asyncio.Task[Any]":
        # The loop only keeps weak references to tasks.
        self._active_tasks.add(task)
        task.add_done_callback(self._active_tasks.discard)
        return task

    def _resolve_token(self, store: Store, action_type: str | None) -> str | None:
        """Read the state and run the token resolver.

        Raises:
            InvalidFetchActionError: If reading the state or resolving fails
        """
        try:
            return self.token_resolver(store.get_state())
        except Exception as e:
            raise InvalidFetchActionError(
                f"Cannot resolve token for {action_type}: {e}",
                action_type=action_type,
            ) from e

    def _prepare(
        self, action: Action, action_type: str | None, token: str | None
    ) -> tuple[str, RequestConfig]:
        """Validate ``meta`` and build the request.

        Raises:
            InvalidFetchActionError: If the request cannot be built
        """
        if not isinstance(action_type, str) or not action_type:
            raise InvalidFetchActionError(
                "Fetch action has no type", action_type=action_type
            )
        try:
            meta = FetchMeta.model_validate(dict(action["meta"]))
            return build_request(
                meta,
                payload=action.get("payload"),
                token=token,
                base_url=self.base_url,
                accept=self.config.accept,
            )
        except (ValidationError, PydanticSerializationError) as e:
            raise InvalidFetchActionError(
                f"Cannot build request for {action_type}: {e}",
                action_type=action_type,
            ) from e

    async def _execute(
        self,
        dispatch: Dispatch,
        action_type: str,
        endpoint: str,
        request: RequestConfig,
        carried: dict[str, Any],
        log: Any,
    ) -> Any:
        increment_in_flight()
        started_at = time.perf_counter()
        try:
            try:
                response = await self.transport(endpoint, request)
            except Exception as e:
                error = TransportError(f"{request.method} {endpoint} failed: {e}", cause=e)
                raise report_failure(dispatch, action_type, error, carried) from e
            result = await report_outcome(dispatch, action_type, response, carried)
        except FetchMiddlewareError as error:
            record_request("failure", error.code)
            log.warning(
                "fetch.failed",
                error_kind=error.kind,
                status=error.code,
                error=error.message,
                duration_ms=_elapsed_ms(started_at),
            )
            raise
        finally:
            decrement_in_flight()
            record_duration(time.perf_counter() - started_at)

        record_request("success", response.status)
        log.info("fetch.succeeded", status=response.status, duration_ms=_elapsed_ms(started_at))
        return result

    async def _reject(
        self,
        dispatch: Dispatch,
        action_type: str,
        error: InvalidFetchActionError,
        carried: dict[str, Any],
        log: Any,
    ) -> Any:
        report_failure(dispatch, action_type, error, carried)
        record_request("failure", None)
        log.warning("fetch.failed", error_kind=error.kind, error=error.message)
        raise error


def create_fetch_middleware(
    token_resolver: TokenResolver = default_token_resolver,
    base_url: str | None = None,
    transport: Transport | None = None,
    config: FetchMiddlewareConfig | None = None,
) -> FetchMiddleware:
    """Create a fetch middleware.

    Args:
        token_resolver: Maps state to a bearer token; default resolves none
        base_url: Prefix for relative URLs; default is ``config.base_url``
        transport: Fetch-shaped transport; default is an HttpxTransport
        config: Configuration object

    Returns:
        A middleware usable as ``middleware(store)(next_)(action)``
    """
    return FetchMiddleware(
        token_resolver=token_resolver,
        base_url=base_url,
        transport=transport,
        config=config,
    )
