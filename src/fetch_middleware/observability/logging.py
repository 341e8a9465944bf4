"""Structured logging configuration for the fetch middleware.

This module provides structured logging using structlog to emit
JSON-formatted logs with contextual information about each request
lifecycle:

- Base action type
- HTTP method and resolved endpoint
- Response status or error kind
- Request duration

Auth tokens are never bound to log events.

Examples:
    Configure logging::

        from fetch_middleware.observability.logging import configure_logging

        configure_logging(level="INFO")

    Output (JSON)::

        {
            "action_type": "FOO_GET",
            "method": "GET",
            "endpoint": "http://example.com/foo",
            "status": 200,
            "duration_ms": 12,
            "event": "fetch.succeeded",
            "level": "info",
            "timestamp": "2024-01-01T00:00:00.000000Z"
        }
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Route fetch lifecycle events to stdout as JSON lines.

    Call once at startup. ``level`` is a standard level name in any case.
    """
    threshold = getattr(logging, level.upper())
    # httpx logs through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=threshold)

    processors: list[object] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.JSONRenderer(),
    ]

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        A structlog logger instance
    """
    return structlog.get_logger(name)
