"""Custom exceptions for the fetch middleware.

This module defines the error taxonomy used as the payload of FAILURE
actions and as the exception raised by the pending task returned from a
dispatched fetch-request action.

Every error carries a ``kind`` so reducers can tell the failure classes
apart without ``isinstance`` checks:

- ``http``: a response arrived with a non-success status
- ``transport``: no response arrived (DNS failure, refused connection, ...)
- ``parse``: a response declared JSON but the body could not be decoded
- ``invalid``: the request action's ``meta`` could not be turned into a request

Examples:
    Handling a failed request in a coroutine::

        from fetch_middleware.exceptions import HTTPError

        try:
            body = await store.dispatch(action)
        except HTTPError as e:
            logger.warning("fetch.rejected", code=e.code, message=e.message)

    Handling a FAILURE action in a reducer::

        def reducer(state, action):
            if action["type"] == action_type_failure("FOO_GET"):
                error = action["payload"]
                return {**state, "error": {"code": error.code, "kind": error.kind}}
            return state
"""

from typing import Any


class FetchMiddlewareError(Exception):
    """Base exception for all fetch middleware errors.

    Attributes:
        message: Human-readable error description.
        code: HTTP status code when one is known, None otherwise.
        kind: Short machine-readable failure class.
    """

    kind = "error"

    def __init__(self, message: str, code: int | None = None) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
            code: HTTP status code, if any.
        """
        self.message = message
        self.code = code
        super().__init__(message)


class HTTPError(FetchMiddlewareError):
    """The server answered with a non-success status.

    ``code`` is the HTTP status and ``message`` the status text, so a FAILURE
    payload reads the same as the response line that caused it.

    Attributes:
        message: The response status text (e.g. "Not Found").
        code: The response status code (e.g. 404).
        response: The transport response, for callers needing the body.

    Examples:
        >>> err = HTTPError(code=404, message="Not Found")
        >>> err.code, err.message, err.kind
        (404, 'Not Found', 'http')
    """

    kind = "http"

    def __init__(self, code: int, message: str, response: Any = None) -> None:
        """Initialize the HTTP error.

        Args:
            code: HTTP status code.
            message: HTTP status text.
            response: The response that triggered the error.
        """
        super().__init__(message, code=code)
        self.response = response


class TransportError(FetchMiddlewareError):
    """The transport failed before any response was received.

    Attributes:
        message: Human-readable error description.
        cause: The exception raised by the transport.
    """

    kind = "transport"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize the transport error.

        Args:
            message: Human-readable error description.
            cause: The underlying transport exception.
        """
        super().__init__(message)
        self.cause = cause


class ResponseParseError(FetchMiddlewareError):
    """A successful response declared JSON but its body did not decode.

    Attributes:
        message: Human-readable error description.
        code: Status code of the response that failed to parse.
        cause: The decoding exception.
    """

    kind = "parse"

    def __init__(
        self,
        message: str,
        code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            message: Human-readable error description.
            code: Status code of the response.
            cause: The underlying decoding exception.
        """
        super().__init__(message, code=code)
        self.cause = cause


class InvalidFetchActionError(FetchMiddlewareError):
    """A fetch-request action carried ``meta`` that cannot become a request.

    Raised (asynchronously, from the pending task) when ``meta.url`` is
    missing or empty, ``meta.method`` is not an HTTP method,
    ``meta.config`` is not a mapping, or the token resolver fails.

    Attributes:
        message: Human-readable error description.
        action_type: Type of the offending action.
    """

    kind = "invalid"

    def __init__(self, message: str, action_type: str | None) -> None:
        """Initialize the invalid action error.

        Args:
            message: Human-readable error description.
            action_type: Type of the offending action.
        """
        super().__init__(message)
        self.action_type = action_type
