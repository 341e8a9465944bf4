"""Token resolvers: functions mapping application state to a bearer token.

A resolver is called once per fetch-request action, synchronously, with the
current state. Returning None (or an empty string) sends the request without
an Authorization header.

Examples:
    Reading a token from nested state::

        resolver = select_token("session", "access_token")
        resolver({"session": {"access_token": "abc"}})   # 'abc'
        resolver({})                                     # None

        middleware = create_fetch_middleware(token_resolver=resolver)
"""

from collections.abc import Callable, Mapping
from typing import Any

TokenResolver = Callable[[Any], str | None]


def default_token_resolver(state: Any) -> str | None:
    """Resolve no token, whatever the state."""
    return None


def select_token(*path: str) -> TokenResolver:
    """Build a resolver reading a token at ``path`` in mapping-shaped state.

    Missing keys and non-mapping intermediate values resolve to None.

    Args:
        *path: Keys leading to the token

    Returns:
        A token resolver
    """
    if not path:
        raise ValueError("select_token requires at least one key")

    def resolve(state: Any) -> str | None:
        value = state
        for key in path:
            if not isinstance(value, Mapping):
                return None
            value = value.get(key)
        return value if isinstance(value, str) and value else None

    return resolve
