"""
Device Registry Backend — Request ID Middleware
=================================================

What:  Correlation id per request, echoed in the X-Request-ID header and
       stamped on every log record emitted while the request is handled.
How:   RequestIDMiddleware binds the id to a ContextVar for the duration of
       the request; RequestIdLogFilter copies it onto log records so the
       format string can use %(request_id)s.

A client-supplied X-Request-ID is reused only when it is a short token of
letters, digits, '.', '_' or '-'; anything else is replaced. The id is
written verbatim into log lines and response headers.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Empty outside of a request (startup, shutdown, background logging)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Returns the client's id if it is safe to log, otherwise a fresh one."""
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return new_request_id()


class RequestIdLogFilter(logging.Filter):
    """Adds `request_id` to every record ("-" outside of a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
