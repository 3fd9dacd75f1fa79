"""
Bookmarks API — Request ID Middleware
=======================================

What:  Tags every request with a correlation ID and every log record with it.
How:   RequestIDMiddleware accepts a well-formed client X-Request-ID or makes
       one, holds it in a ContextVar for the duration of the request and
       echoes it in the response. RequestIDLogFilter copies the ContextVar
       onto each LogRecord as `request_id`.
When:  Outermost middleware, so access, audit and error lines all carry it.

    2024-05-01T10:00:00 [WARNING] [3f2a9c1e] bookmarks_api.audit: Rejected bookmark create ...
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client IDs end up in log lines; keep them short and free of separators
_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Sets record.request_id ("-" outside a request). Never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID if it matches [A-Za-z0-9._-]{1,64}
        2. Otherwise generate 8 hex characters
        3. Bind it to request_id_var and request.state for this request only
        4. Add X-Request-ID to the response
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        supplied = request.headers.get(REQUEST_ID_HEADER, "")
        rid = supplied if _CLIENT_ID.fullmatch(supplied) else new_request_id()
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
