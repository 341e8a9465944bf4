"""Prometheus metrics for the fetch middleware.

Metrics include:

- Request counter by outcome (success, failure) and status code
- Request duration histogram
- In-flight requests gauge

Examples:
    Recording a completed request::

        from fetch_middleware.observability.metrics import record_request

        record_request(outcome="success", status_code=200)
        record_request(outcome="failure", status_code=None)  # transport failure
"""

from prometheus_client import Counter, Gauge, Histogram

# Labels: outcome (success, failure), status_code ("none" when no response)
requests_total = Counter(
    "fetch_middleware_requests_total",
    "Total number of fetch-request actions that reached a terminal state",
    ["outcome", "status_code"],
)

request_duration_seconds = Histogram(
    "fetch_middleware_request_duration_seconds",
    "Time from STARTED to the terminal action in seconds",
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Requests between STARTED and their terminal action
in_flight_requests = Gauge(
    "fetch_middleware_in_flight_requests",
    "Number of fetch requests currently in flight",
)


def record_request(outcome: str, status_code: int | None) -> None:
    """Record a request that reached SUCCESS or FAILURE.

    Args:
        outcome: "success" or "failure"
        status_code: HTTP status, or None when no response was received
    """
    label = "none" if status_code is None else str(status_code)
    requests_total.labels(outcome=outcome, status_code=label).inc()


def record_duration(duration_seconds: float) -> None:
    """Record the duration of one request lifecycle."""
    request_duration_seconds.observe(duration_seconds)


def increment_in_flight() -> None:
    """Called when a request is issued."""
    in_flight_requests.inc()


def decrement_in_flight() -> None:
    """Called when a request settles, whatever the outcome."""
    in_flight_requests.dec()
