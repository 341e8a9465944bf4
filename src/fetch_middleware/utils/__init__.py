"""Utility modules for the fetch middleware."""

from .headers import merge_headers

__all__ = [
    "merge_headers",
]
