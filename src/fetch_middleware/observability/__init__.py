"""Observability utilities for the fetch middleware.

This package provides monitoring and debugging capabilities:
- Prometheus metrics for request outcomes, durations and in-flight counts
- Structured logging of each request lifecycle
"""

from fetch_middleware.observability.logging import configure_logging, get_logger
from fetch_middleware.observability.metrics import (
    decrement_in_flight,
    increment_in_flight,
    record_duration,
    record_request,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "record_request",
    "record_duration",
    "increment_in_flight",
    "decrement_in_flight",
]
