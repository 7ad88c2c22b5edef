"""
Word REST API: Access Logging Middleware
=========================================

What:  One log line per request: method, path, status, duration, request id.
How:   Measures wall time around call_next and picks the level from the
       status code (5xx ERROR, 4xx WARNING, otherwise INFO).

Log line:
    GET /api/users 200 3.4ms [a1b2c3d4] from 127.0.0.1

Request and response bodies are never logged (they carry names and emails).
Health probes are skipped.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from word_rest_api.middleware.request_id import request_id_var

logger = logging.getLogger("word_rest_api.access")

_QUIET_PATHS = frozenset({"/health", "/health/ready"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in _QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        rid = request_id_var.get("")
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
