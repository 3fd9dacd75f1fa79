"""
Bookmarks API — Request Logging Middleware
============================================

What:  One access-log line per HTTP request on the "bookmarks_api.access" logger.
How:   Times call_next and logs method, path, status, duration and client IP.
       The request ID is added to the record by RequestIDLogFilter.

Level by status:
    5xx (or an exception escaping the app) → ERROR, 4xx → WARNING, else INFO

Request bodies, query strings and the Authorization header are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("bookmarks_api.access")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Probed every few seconds by orchestrators
    QUIET_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            self._log(request, status, (time.perf_counter() - started) * 1000)
        return response

    @staticmethod
    def _log(request: Request, status: int, duration_ms: float) -> None:
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
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
