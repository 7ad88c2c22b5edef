"""
Word REST API: Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    Responses pass back through in reverse, so the access log sees the final
    status code and the X-Request-ID header is set on every response.
"""

from word_rest_api.middleware.logging import RequestLoggingMiddleware
from word_rest_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "request_id_var",
]
