"""Outcome reporting for settled fetch requests.

Interprets a response and dispatches exactly one terminal action:

- Non-OK response: FAILURE with an HTTPError payload, then raise it
- OK response with a JSON content-type: parse JSON, dispatch SUCCESS
- OK response otherwise: read text, dispatch SUCCESS
- Declared JSON that fails to decode: FAILURE with a ResponseParseError
- Body that cannot be read: FAILURE with a TransportError

Terminal actions carry the request's carried-forward metadata as ``meta``
and are sanitized, so an empty ``meta`` is left out entirely.
"""

import re
from collections.abc import Callable, Mapping
from typing import Any

from fetch_middleware.actions import (
    Action,
    action_type_failure,
    action_type_success,
    create_action,
    sanitize_action,
)
from fetch_middleware.exceptions import (
    FetchMiddlewareError,
    HTTPError,
    ResponseParseError,
    TransportError,
)
from fetch_middleware.transport import FetchResponse

JSON_CONTENT_PATTERN = re.compile(r"application/json")


def build_terminal_action(action_type: str, payload: Any, meta: Mapping[str, Any]) -> Action:
    """Build a sanitized SUCCESS or FAILURE action.

    ``meta`` is copied so later changes to the caller's mapping do not leak
    into the dispatched action.

    Examples:
        >>> build_terminal_action("@api/FOO/SUCCESS", "OK!", {})
        {'type': '@api/FOO/SUCCESS', 'payload': 'OK!'}
        >>> build_terminal_action("@api/FOO/SUCCESS", "OK!", {"id": 1})
        {'type': '@api/FOO/SUCCESS', 'payload': 'OK!', 'meta': {'id': 1}}
    """
    return sanitize_action(create_action(action_type, payload=payload, meta=dict(meta)))


async def parse_response_body(response: FetchResponse) -> Any:
    """Parse a response body according to its content-type.

    Args:
        response: A settled response

    Returns:
        The decoded JSON value, or the body text

    Raises:
        ResponseParseError: If the body is declared JSON but does not decode
        TransportError: If the body cannot be read
    """
    content_type = response.headers.get("content-type")
    try:
        if content_type and JSON_CONTENT_PATTERN.search(content_type):
            try:
                return await response.json()
            except ValueError as e:
                raise ResponseParseError(
                    f"Malformed JSON response body: {e}",
                    code=response.status,
                    cause=e,
                ) from e
        return await response.text()
    except FetchMiddlewareError:
        raise
    except Exception as e:
        raise TransportError(f"Failed to read response body: {e}", cause=e) from e


def report_failure(
    dispatch: Callable[[Action], Any],
    action_type: str,
    error: FetchMiddlewareError,
    meta: Mapping[str, Any],
) -> FetchMiddlewareError:
    """Dispatch the FAILURE action for ``error`` and return the error.

    Returning the error lets callers write ``raise report_failure(...)``.
    """
    dispatch(build_terminal_action(action_type_failure(action_type), error, meta))
    return error


async def report_outcome(
    dispatch: Callable[[Action], Any],
    action_type: str,
    response: FetchResponse,
    meta: Mapping[str, Any],
) -> Any:
    """Dispatch the terminal action for a settled response.

    Args:
        dispatch: Store dispatch function
        action_type: Base type of the request action
        response: The settled response
        meta: Carried-forward metadata

    Returns:
        The parsed response body

    Raises:
        HTTPError: If the response status is not OK
        ResponseParseError: If a JSON body fails to decode
        TransportError: If the body cannot be read
    """
    if not response.ok:
        error = HTTPError(code=response.status, message=response.status_text, response=response)
        raise report_failure(dispatch, action_type, error, meta)

    try:
        result = await parse_response_body(response)
    except FetchMiddlewareError as error:
        report_failure(dispatch, action_type, error, meta)
        raise

    dispatch(build_terminal_action(action_type_success(action_type), result, meta))
    return result
