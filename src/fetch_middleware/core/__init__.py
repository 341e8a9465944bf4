"""Core middleware logic for the fetch middleware.

This package contains the request lifecycle:
- Request builder: endpoint, headers, method and body for a request action
- Middleware: classification, STARTED dispatch and request scheduling
- Outcome: response interpretation and SUCCESS/FAILURE dispatch
"""

from fetch_middleware.core.middleware import FetchMiddleware, create_fetch_middleware

__all__ = ["FetchMiddleware", "create_fetch_middleware"]
