"""
Prometheus metrics middleware for HTTP requests.

Requests are labelled with the route template they match
(``/admin/disconnect/{identity}``), never the raw path, so the number of
series stays fixed however many identities are disconnected or paths
probed. WebSocket traffic bypasses this middleware and is measured by the
session itself.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

from chat_hub.utils.metrics import (
    http_request_duration_seconds,
    http_requests_in_progress,
    http_requests_total,
)

UNMATCHED_ENDPOINT = "unmatched"


def endpoint_label(request: Request) -> str:
    """
    Route template of the request, or ``"unmatched"`` for unknown paths.

    A partial match (known path, wrong method) still reports the template.
    """
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match is not Match.NONE:
            return getattr(route, "path", UNMATCHED_ENDPOINT)
    return UNMATCHED_ENDPOINT


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Tracks request count, duration and concurrency of the HTTP endpoints.

    - http_requests_total: by method, route template and status code
    - http_request_duration_seconds: by method and route template
    - http_requests_in_progress: by method and route template
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method
        endpoint = endpoint_label(request)
        status_code = 500

        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()
        start_time = time.time()

        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            http_request_duration_seconds.labels(
                method=method, endpoint=endpoint
            ).observe(time.time() - start_time)
            http_requests_total.labels(
                method=method, endpoint=endpoint, status_code=status_code
            ).inc()
            http_requests_in_progress.labels(
                method=method, endpoint=endpoint
            ).dec()
