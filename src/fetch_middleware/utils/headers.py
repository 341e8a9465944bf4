"""Header merge utilities for the fetch middleware.

HTTP header names are case-insensitive, while the request configuration
keeps headers in a plain dict. Merging keeps one spelling per header
regardless of the case callers use.
"""

from collections.abc import Mapping


def merge_headers(*header_dicts: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings with case-insensitive key handling.

    Later mappings override earlier ones, and the key spelling of the last
    mapping wins. ``None`` entries are skipped so optional caller headers
    can be passed straight through.

    Args:
        *header_dicts: Header mappings to merge, lowest precedence first

    Returns:
        A new merged headers dictionary

    Example:
        >>> merge_headers({"Accept": "application/json"}, {"accept": "text/plain"})
        {'accept': 'text/plain'}
        >>> merge_headers({"Accept": "application/json"}, None)
        {'Accept': 'application/json'}
    """
    canonical_keys: dict[str, str] = {}
    result: dict[str, str] = {}

    for headers in header_dicts:
        if not headers:
            continue
        for key, value in headers.items():
            key_lower = key.lower()

            # Replace any earlier spelling of the same header
            old_key = canonical_keys.get(key_lower)
            if old_key is not None:
                result.pop(old_key, None)

            canonical_keys[key_lower] = key
            result[key] = value

    return result
