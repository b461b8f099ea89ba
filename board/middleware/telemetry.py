"""Request metrics middleware."""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from board.telemetry import observe_request

UNMATCHED_ROUTE = "unmatched"


def route_label(request: Request) -> str:
    """Return the matched route pattern, never the raw path."""

    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or UNMATCHED_ROUTE


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Count board requests and time them for Prometheus."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            observe_request(
                request.method,
                route_label(request),
                status_code,
                time.perf_counter() - started,
            )
