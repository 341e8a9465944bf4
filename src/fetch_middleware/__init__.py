"""
Fetch middleware for Redux-style dispatch pipelines.

This package turns dispatched actions tagged with ``meta.type == "@api"``
into HTTP requests and reports each request's lifecycle as STARTED, SUCCESS
and FAILURE actions.
"""

from fetch_middleware.actions import (
    API_FETCH_TYPE,
    action_type_failure,
    action_type_started,
    action_type_success,
    create_action,
    is_fetch_action,
    sanitize_action,
)
from fetch_middleware.config import FetchMiddlewareConfig
from fetch_middleware.core.middleware import FetchMiddleware, create_fetch_middleware
from fetch_middleware.exceptions import (
    FetchMiddlewareError,
    HTTPError,
    InvalidFetchActionError,
    ResponseParseError,
    TransportError,
)
from fetch_middleware.token import default_token_resolver, select_token
from fetch_middleware.transport import HttpxTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "API_FETCH_TYPE",
    "action_type_started",
    "action_type_success",
    "action_type_failure",
    "create_action",
    "is_fetch_action",
    "sanitize_action",
    "FetchMiddlewareConfig",
    "FetchMiddleware",
    "create_fetch_middleware",
    "FetchMiddlewareError",
    "HTTPError",
    "InvalidFetchActionError",
    "ResponseParseError",
    "TransportError",
    "default_token_resolver",
    "select_token",
    "HttpxTransport",
]
