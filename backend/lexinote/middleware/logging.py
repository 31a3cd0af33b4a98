"""
LexiNote Backend — Request Logging Middleware
===============================================

What:  One access-log line per HTTP request with status and duration.
How:   Measures wall time around the downstream app and logs at a level
       chosen from the status class.
Who:   Applied to every request via Starlette middleware, inside
       RequestIDMiddleware so the request ID is already set.

Example line:
    2026-10-19T10:00:00 [INFO] lexinote.access [a1b2c3d4]: POST /api/ai/simplify 200 1834.2ms from 10.0.2.2

Request bodies are never logged: they carry note text and, for the
provider settings routes, API keys.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lexinote.middleware.request_id import request_id_var

logger = logging.getLogger("lexinote.access")

# Probed by container health checks every few seconds
QUIET_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Typical durations:
        - GET /health, GET /api/notes: a few milliseconds (SQLite)
        - POST /api/ai/*: 1-10 seconds, dominated by the vendor round trip
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        rid = request_id_var.get("")

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            status,
            duration_ms,
            client_ip,
            extra={
                "request_id": rid or "-",
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
