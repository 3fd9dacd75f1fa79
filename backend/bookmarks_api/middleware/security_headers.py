"""
Bookmarks API — Security Headers Middleware
=============================================

What:  Adds conservative browser security headers to every response.
How:   Sets each header unless the route already set it.

Headers:
    X-Content-Type-Options: nosniff     no MIME sniffing of JSON/text bodies
    X-Frame-Options: DENY               never render inside a frame
    Referrer-Policy: no-referrer
    X-XSS-Protection: 0                 legacy auditor disabled
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
