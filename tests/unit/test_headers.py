"""Unit tests for header utilities."""

from fetch_middleware.utils.headers import merge_headers


class TestMergeHeaders:
    """Tests for merge_headers function."""

    def test_later_overrides_earlier(self):
        merged = merge_headers({"Accept": "application/json"}, {"Accept": "text/plain"})
        assert merged == {"Accept": "text/plain"}

    def test_override_is_case_insensitive(self):
        merged = merge_headers({"Accept": "application/json"}, {"accept": "text/plain"})
        assert merged == {"accept": "text/plain"}

    def test_disjoint_headers_combined(self):
        merged = merge_headers({"Accept": "application/json"}, {"X-Trace": "abc"})
        assert merged == {"Accept": "application/json", "X-Trace": "abc"}

    def test_none_and_empty_skipped(self):
        merged = merge_headers({"Accept": "application/json"}, None, {})
        assert merged == {"Accept": "application/json"}

    def test_inputs_not_mutated(self):
        first = {"Accept": "application/json"}
        second = {"accept": "text/plain"}
        merge_headers(first, second)
        assert first == {"Accept": "application/json"}
        assert second == {"accept": "text/plain"}

    def test_no_arguments(self):
        assert merge_headers() == {}
