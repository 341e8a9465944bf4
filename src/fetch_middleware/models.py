"""Core type definitions for the fetch middleware.

This module provides the validated view of a request action's ``meta`` and
the finalized per-call transport configuration.

Examples:
    Validating request metadata::

        from fetch_middleware.models import FetchMeta

        meta = FetchMeta.model_validate(
            {"type": "@api", "url": "/users/1", "method": "delete", "id": 1}
        )
        meta.method              # 'DELETE'
        FetchMeta.carried_meta({"type": "@api", "url": "/users/1", "id": 1})
        # {'id': 1}
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator

from fetch_middleware.actions import API_FETCH_TYPE

VALID_HTTP_METHODS = {
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "DELETE",
    "CONNECT",
    "OPTIONS",
    "TRACE",
    "PATCH",
}

# Keys of a request action's meta consumed by the middleware itself
RESERVED_META_KEYS = frozenset({"type", "url", "method", "config"})


class FetchMeta(BaseModel):
    """The ``meta`` of a fetch-request action.

    Only the reserved keys are validated here; every other key is opaque
    carried-forward metadata (see ``carried_meta``).

    Attributes:
        type: The fetch marker, always API_FETCH_TYPE for matched actions.
        url: Absolute URL or path relative to the configured base URL.
        method: HTTP method, upper-cased. Default is "GET".
        config: Transport options used as the merge base. Default is {}.
    """

    type: str = Field(default=API_FETCH_TYPE, description="Fetch action marker")
    url: str = Field(
        ...,
        min_length=1,
        description="Absolute URL or path relative to the base URL",
        examples=["http://example.com/foo", "/users/1"],
    )
    method: str = Field(default="GET", description="HTTP method")
    config: dict[str, Any] = Field(
        default_factory=dict,
        description="Transport options (headers, params, timeout, ...)",
    )

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("method", mode="before")
    @classmethod
    def validate_method(cls, v: Any) -> str:
        """Upper-case and validate the HTTP method.

        Raises:
            ValueError: If the method is not a known HTTP method.
        """
        if v is None:
            return "GET"
        if not isinstance(v, str):
            raise ValueError("method must be a string")
        method = v.strip().upper()
        if method not in VALID_HTTP_METHODS:
            raise ValueError(
                f"Invalid HTTP method: {v}. "
                f"Valid methods are: {', '.join(sorted(VALID_HTTP_METHODS))}"
            )
        return method

    @field_validator("config", mode="before")
    @classmethod
    def validate_config(cls, v: Any) -> Any:
        """Treat a missing ``config`` as an empty one and check its headers.

        Raises:
            ValueError: If ``config["headers"]`` is present but not a mapping.
        """
        if v is None:
            return {}
        if isinstance(v, Mapping):
            headers = v.get("headers")
            if headers is not None and not isinstance(headers, Mapping):
                raise ValueError("config.headers must be a mapping")
        return v

    @staticmethod
    def carried_meta(meta: Mapping[str, Any]) -> dict[str, Any]:
        """Return the extra ``meta`` keys echoed onto the terminal action.

        Keys keep their original order and values are copied verbatim.

        Example:
            >>> FetchMeta.carried_meta({"type": "@api", "url": "/a", "id": 7, "tag": "x"})
            {'id': 7, 'tag': 'x'}
        """
        return {key: value for key, value in meta.items() if key not in RESERVED_META_KEYS}


class RequestConfig(BaseModel):
    """Finalized transport configuration for one request.

    A fresh instance is built for every matched action and never shared
    between in-flight calls.

    Attributes:
        method: HTTP method sent on the wire.
        headers: Request headers after defaults, auth and caller overrides.
        body: Serialized request body, if any.
        options: Remaining transport options (e.g. ``params``, ``timeout``).
    """

    method: str = Field(..., description="HTTP method")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: str | bytes | None = Field(default=None, description="Request body")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra keyword options passed to the transport",
    )

    model_config = {"frozen": True}
