"""
Bookmarks API — Bearer Token Middleware
=========================================

What:  Rejects any request that does not carry the configured API token.
How:   Compares "Authorization: Bearer <token>" against the token handed to
       the middleware at construction, in constant time.
When:  Before the route handler; exempt paths and CORS preflight pass through.

Response on failure:
    HTTP 401 {"error": "Unauthorized request"} with WWW-Authenticate: Bearer
"""

import hmac
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Shared-secret bearer authentication for the whole API.

    An empty configured token rejects every non-exempt request rather than
    accepting every request.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, api_token: str = "", **kwargs):
        super().__init__(app, **kwargs)
        self._api_token = api_token

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS" or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        if not self._is_authorized(request.headers.get("Authorization")):
            logger.error("Unauthorized request to path: %s", request.url.path)
            return JSONResponse(
                status_code=401,
                content={"error": "Unauthorized request"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        return await call_next(request)

    def _is_authorized(self, header: str | None) -> bool:
        if not header or not self._api_token:
            return False
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return False
        return hmac.compare_digest(token.strip().encode(), self._api_token.encode())
