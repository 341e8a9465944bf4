"""Unit tests for logging and metrics helpers."""

import json

import pytest
import structlog
from prometheus_client import REGISTRY

from fetch_middleware.observability import (
    configure_logging,
    decrement_in_flight,
    get_logger,
    increment_in_flight,
    record_duration,
    record_request,
)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestLogging:
    """Tests for configure_logging and get_logger."""

    def test_json_output(self, capsys, reset_structlog):
        configure_logging(level="info")

        get_logger("tests").info("fetch.succeeded", action_type="FOO_GET", status=200)

        line = capsys.readouterr().out.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "fetch.succeeded"
        assert event["action_type"] == "FOO_GET"
        assert event["status"] == 200
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filters_debug(self, capsys, reset_structlog):
        configure_logging(level="WARNING")

        get_logger("tests").debug("fetch.started")

        assert "fetch.started" not in capsys.readouterr().out


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetrics:
    """Tests for prometheus metric helpers."""

    def test_record_request(self):
        labels = {"outcome": "failure", "status_code": "418"}
        before = sample("fetch_middleware_requests_total", labels)

        record_request("failure", 418)

        assert sample("fetch_middleware_requests_total", labels) == before + 1

    def test_record_request_without_status(self):
        labels = {"outcome": "failure", "status_code": "none"}
        before = sample("fetch_middleware_requests_total", labels)

        record_request("failure", None)

        assert sample("fetch_middleware_requests_total", labels) == before + 1

    def test_in_flight_gauge(self):
        before = sample("fetch_middleware_in_flight_requests")

        increment_in_flight()
        assert sample("fetch_middleware_in_flight_requests") == before + 1
        decrement_in_flight()
        assert sample("fetch_middleware_in_flight_requests") == before

    def test_record_duration(self):
        before = sample("fetch_middleware_request_duration_seconds_count")

        record_duration(0.2)

        assert sample("fetch_middleware_request_duration_seconds_count") == before + 1
