"""Request construction for fetch-request actions.

Turns the validated ``meta`` of a request action, its payload and the
resolved auth token into the endpoint string and a fresh RequestConfig:

1. Resolve the endpoint against the base URL unless it is absolute
2. Assemble headers: Accept, then Authorization, then caller overrides
3. Set the method from ``meta.method``, ignoring any ``config["method"]``
4. Serialize the payload as JSON and force ``Content-Type`` to match

The caller's ``meta.config`` is read, never mutated.
"""

import json
import re
from typing import Any

from pydantic_core import to_jsonable_python

from fetch_middleware.models import FetchMeta, RequestConfig
from fetch_middleware.utils.headers import merge_headers

ABSOLUTE_URL_PATTERN = re.compile(r"https?://")

JSON_CONTENT_TYPE = "application/json"

# Keys of meta.config handled explicitly instead of passed to the transport
_CONFIG_KEYS = frozenset({"headers", "method", "body"})


def resolve_endpoint(url: str, base_url: str = "") -> str:
    """Prefix relative URLs with the base URL.

    Examples:
        >>> resolve_endpoint("/foo", "https://api.example.com")
        'https://api.example.com/foo'
        >>> resolve_endpoint("http://example.com/foo", "https://api.example.com")
        'http://example.com/foo'
    """
    if ABSOLUTE_URL_PATTERN.search(url):
        return url
    return base_url + url


def build_headers(
    token: str | None,
    config_headers: dict[str, str] | None = None,
    accept: str = JSON_CONTENT_TYPE,
) -> dict[str, str]:
    """Assemble request headers.

    Caller headers override the defaults, including Authorization.

    Args:
        token: Bearer token, or None/empty for an unauthenticated request
        config_headers: Headers from ``meta.config``
        accept: Default Accept header value

    Returns:
        A new headers dictionary

    Examples:
        >>> build_headers("abc")
        {'Accept': 'application/json', 'Authorization': 'Bearer abc'}
        >>> build_headers(None, {"accept": "text/plain"})
        {'accept': 'text/plain'}
    """
    base_headers = {"Accept": accept}
    if token:
        base_headers["Authorization"] = f"Bearer {token}"
    return merge_headers(base_headers, config_headers)


def serialize_payload(payload: Any) -> str:
    """Serialize a payload to a JSON string.

    Pydantic models, dataclasses, datetimes and UUIDs are converted to their
    JSON-able form first.

    Raises:
        PydanticSerializationError: If the payload has no JSON representation.
    """
    return json.dumps(to_jsonable_python(payload))


def build_request(
    meta: FetchMeta,
    payload: Any = None,
    token: str | None = None,
    base_url: str = "",
    accept: str = JSON_CONTENT_TYPE,
) -> tuple[str, RequestConfig]:
    """Build the endpoint and transport configuration for a request action.

    Args:
        meta: Validated request metadata
        payload: Action payload; None means no JSON body
        token: Resolved auth token
        base_url: Prefix for relative URLs
        accept: Default Accept header value

    Returns:
        Tuple of (endpoint, RequestConfig)

    Raises:
        ValidationError: If caller headers are not string-valued
        PydanticSerializationError: If the payload cannot be serialized
    """
    endpoint = resolve_endpoint(meta.url, base_url)
    headers = build_headers(token, meta.config.get("headers"), accept)

    body = meta.config.get("body")
    if payload is not None:
        body = serialize_payload(payload)
        headers = merge_headers(headers, {"Content-Type": JSON_CONTENT_TYPE})

    options = {key: value for key, value in meta.config.items() if key not in _CONFIG_KEYS}

    return endpoint, RequestConfig(
        method=meta.method,
        headers=headers,
        body=body,
        options=options,
    )
