"""
Correlation IDs for the hub's HTTP requests.

Admin, health and metrics requests carry an ``X-Correlation-ID`` that the
console formatter prints next to every log line the request produces.
Chat sessions are tagged with ``connection_id`` through the log context
instead.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORRELATION_ID_HEADER = "X-Correlation-ID"
CORRELATION_ID_LENGTH = 8

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Reuses the caller's correlation ID or generates one, truncated to
    ``CORRELATION_ID_LENGTH`` characters, and echoes it in the response.

    The ID is exposed as ``request.state.request_id`` and through
    ``get_correlation_id()`` for the duration of the request only.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or uuid.uuid4().hex
        cid = cid[:CORRELATION_ID_LENGTH]

        request.state.request_id = cid
        token = correlation_id.set(cid)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)

        response.headers[CORRELATION_ID_HEADER] = cid
        return response


def get_correlation_id() -> str:
    """Correlation ID of the current request, empty outside a request."""
    return correlation_id.get()
