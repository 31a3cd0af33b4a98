"""
LexiNote Backend — Request ID Middleware
==========================================

What:  Assigns a correlation ID to each incoming request and echoes it back.
How:   Reuses the client's X-Request-ID header when present (truncated to
       64 characters), otherwise generates an 8-character UUID prefix. The ID
       lives in a ContextVar for the duration of the request so loggers and
       exception handlers can read it without access to the Request object.
Who:   Applied to every request via Starlette middleware.

The mobile client can send its own X-Request-ID when the user taps
"Simplify" and quote it in bug reports; the same ID then appears in the
server's access log and in any error body.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_REQUEST_ID_LENGTH = 64


class RequestIDLogFilter(logging.Filter):
    """Adds `request_id` to every log record so the format string can use it."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Take X-Request-ID from the client, or generate one
        2. Store it in request_id_var and request.state.request_id
        3. Add it to the response headers
        4. Restore the previous ContextVar value afterwards
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        incoming = request.headers.get("X-Request-ID", "").strip()
        rid = incoming[:MAX_REQUEST_ID_LENGTH] if incoming else str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
