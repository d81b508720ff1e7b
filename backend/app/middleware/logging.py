"""
Device Registry Backend — Access Log Middleware
=================================================

What:  One "registry.access" line per HTTP request.
How:   Times the rest of the stack and logs method, path, status and
       duration. The request id comes from RequestIdLogFilter.

Requests that fail with an unhandled exception are still logged, as 500,
before the exception continues to the server error handler.

Level by status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("registry.access")

# Polled by load balancers
_QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _route_template(request: Request) -> str:
    # Set by the router once a route matched, e.g. "/api/devices/{device_id}"
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _QUIET_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            client_ip = request.client.host if request.client else "unknown"
            logger.log(
                level_for_status(status),
                "%s %s %d %.1fms from %s",
                request.method,
                request.url.path,
                status,
                duration_ms,
                client_ip,
                extra={
                    "route": _route_template(request),
                    "status": status,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": client_ip,
                },
            )
