"""Action helpers: the ``@api`` marker, lifecycle type names and sanitizers.

Actions are plain dictionaries with a ``type`` and optional ``payload`` and
``meta`` keys. A fetch-request action is tagged by ``meta["type"] == "@api"``;
for a request action of type ``T`` the middleware dispatches
``@api/T/STARTED``, then one of ``@api/T/SUCCESS`` or ``@api/T/FAILURE``.

Examples:
    Matching lifecycle actions in a reducer::

        from fetch_middleware.actions import action_type_started, action_type_success

        def reducer(state, action):
            if action["type"] == action_type_started("FOO_GET"):
                return {**state, "loading": True}
            if action["type"] == action_type_success("FOO_GET"):
                return {**state, "loading": False, "foo": action["payload"]}
            return state
"""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

API_FETCH_TYPE = "@api"

Action = dict[str, Any]
Sanitizer = Callable[[Action], Action]

_MISSING: Any = object()


def action_type_started(action_type: str) -> str:
    """Return the STARTED lifecycle type for ``action_type``.

    Examples:
        >>> action_type_started("FOO")
        '@api/FOO/STARTED'
    """
    return f"{API_FETCH_TYPE}/{action_type}/STARTED"


def action_type_success(action_type: str) -> str:
    """Return the SUCCESS lifecycle type for ``action_type``.

    Examples:
        >>> action_type_success("FOO")
        '@api/FOO/SUCCESS'
    """
    return f"{API_FETCH_TYPE}/{action_type}/SUCCESS"


def action_type_failure(action_type: str) -> str:
    """Return the FAILURE lifecycle type for ``action_type``.

    Examples:
        >>> action_type_failure("FOO")
        '@api/FOO/FAILURE'
    """
    return f"{API_FETCH_TYPE}/{action_type}/FAILURE"


def is_fetch_action(action: Any) -> bool:
    """Check whether an action should be turned into a network request.

    Args:
        action: Any dispatched value.

    Returns:
        True if the action is a mapping whose ``meta`` is a mapping with
        ``type`` equal to API_FETCH_TYPE.

    Examples:
        >>> is_fetch_action({"type": "FOO", "meta": {"type": "@api", "url": "/foo"}})
        True
        >>> is_fetch_action({"type": "FOO"})
        False
    """
    if not isinstance(action, Mapping):
        return False
    meta = action.get("meta")
    return isinstance(meta, Mapping) and meta.get("type") == API_FETCH_TYPE


def create_action(action_type: str, payload: Any = _MISSING, meta: Any = _MISSING) -> Action:
    """Build a plain action, leaving out fields that were not supplied.

    ``None`` is a valid payload and is kept; only omitted arguments are
    left out of the result.

    Examples:
        >>> create_action("@api/FOO/STARTED")
        {'type': '@api/FOO/STARTED'}
        >>> create_action("@api/FOO/SUCCESS", payload="OK!", meta={"id": 1})
        {'type': '@api/FOO/SUCCESS', 'payload': 'OK!', 'meta': {'id': 1}}
    """
    action: Action = {"type": action_type}
    if payload is not _MISSING:
        action["payload"] = payload
    if meta is not _MISSING:
        action["meta"] = meta
    return action


def strip_blank_meta(action: Action) -> Action:
    """Drop ``meta`` from an action when it is an empty mapping.

    Returns a new dict when ``meta`` is removed; otherwise the action is
    returned as is.
    """
    meta = action.get("meta", _MISSING)
    if isinstance(meta, Mapping) and not meta:
        return {key: value for key, value in action.items() if key != "meta"}
    return action


DEFAULT_SANITIZERS: tuple[Sanitizer, ...] = (strip_blank_meta,)


def sanitize_action(
    action: Action,
    sanitizers: Sequence[Sanitizer] = DEFAULT_SANITIZERS,
) -> Action:
    """Fold an action through each sanitizer in order.

    Args:
        action: The action to clean up before dispatch.
        sanitizers: Functions taking and returning an action.

    Returns:
        The sanitized action.

    Examples:
        >>> sanitize_action({"type": "@api/FOO/SUCCESS", "payload": 1, "meta": {}})
        {'type': '@api/FOO/SUCCESS', 'payload': 1}
    """
    for sanitizer in sanitizers:
        action = sanitizer(action)
    return action
