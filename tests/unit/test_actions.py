"""Unit tests for action helpers."""

from fetch_middleware.actions import (
    API_FETCH_TYPE,
    action_type_failure,
    action_type_started,
    action_type_success,
    create_action,
    is_fetch_action,
    sanitize_action,
    strip_blank_meta,
)


class TestActionTypes:
    """Tests for lifecycle action type helpers."""

    def test_started(self):
        assert action_type_started("FOO") == "@api/FOO/STARTED"
        assert action_type_started("BAR") == "@api/BAR/STARTED"

    def test_success(self):
        assert action_type_success("FOO") == "@api/FOO/SUCCESS"
        assert action_type_success("BAR") == "@api/BAR/SUCCESS"

    def test_failure(self):
        assert action_type_failure("FOO") == "@api/FOO/FAILURE"
        assert action_type_failure("BAR") == "@api/BAR/FAILURE"

    def test_marker_value(self):
        assert API_FETCH_TYPE == "@api"


class TestIsFetchAction:
    """Tests for is_fetch_action classification."""

    def test_matches_tagged_action(self):
        assert is_fetch_action({"type": "FOO", "meta": {"type": "@api", "url": "/foo"}})

    def test_rejects_action_without_meta(self):
        assert not is_fetch_action({"type": "FOO"})

    def test_rejects_other_meta_type(self):
        assert not is_fetch_action({"type": "FOO", "meta": {"type": "@other"}})

    def test_rejects_meta_without_type(self):
        assert not is_fetch_action({"type": "FOO", "meta": {"url": "/foo"}})

    def test_rejects_non_mapping_meta(self):
        assert not is_fetch_action({"type": "FOO", "meta": "@api"})

    def test_rejects_non_mapping_action(self):
        assert not is_fetch_action(None)
        assert not is_fetch_action("FOO")
        assert not is_fetch_action(lambda dispatch: None)


class TestCreateAction:
    """Tests for create_action."""

    def test_type_only(self):
        assert create_action("FOO") == {"type": "FOO"}

    def test_payload_and_meta(self):
        assert create_action("FOO", payload=1, meta={"id": 2}) == {
            "type": "FOO",
            "payload": 1,
            "meta": {"id": 2},
        }

    def test_none_payload_is_kept(self):
        assert create_action("FOO", payload=None) == {"type": "FOO", "payload": None}


class TestSanitizeAction:
    """Tests for action sanitizers."""

    def test_strips_empty_meta(self):
        action = {"type": "FOO", "payload": "OK!", "meta": {}}
        assert sanitize_action(action) == {"type": "FOO", "payload": "OK!"}

    def test_keeps_non_empty_meta(self):
        action = {"type": "FOO", "payload": "OK!", "meta": {"id": 1}}
        assert sanitize_action(action) == action

    def test_strip_does_not_mutate_input(self):
        action = {"type": "FOO", "meta": {}}
        stripped = strip_blank_meta(action)
        assert "meta" in action
        assert "meta" not in stripped

    def test_action_without_meta_unchanged(self):
        action = {"type": "FOO"}
        assert strip_blank_meta(action) is action

    def test_custom_sanitizers_applied_in_order(self):
        calls = []

        def first(action):
            calls.append("first")
            return {**action, "first": True}

        def second(action):
            calls.append("second")
            return {**action, "second": action.get("first", False)}

        result = sanitize_action({"type": "FOO"}, [first, second])

        assert calls == ["first", "second"]
        assert result == {"type": "FOO", "first": True, "second": True}

    def test_no_sanitizers_returns_action(self):
        action = {"type": "FOO", "meta": {}}
        assert sanitize_action(action, []) is action
