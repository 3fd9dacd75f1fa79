"""
Bookmarks API — Custom Exception Hierarchy
============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return responses with the correct HTTP status codes.
Who:   Raised by the validator, the store adapters and the bookmark service.

Exception Hierarchy:
    BookmarksError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── StoreError        → 500 Internal Server Error

Unauthorized requests never reach this hierarchy: the bearer-token
middleware answers them with 401 directly.
"""

from typing import Any, Dict, Optional


class BookmarksError(Exception):
    """
    Base exception for all Bookmarks API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only returned in development)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarksError):
    """
    Raised when a bookmark payload fails validation.

    HTTP:    400 Bad Request

    The message is the literal reason returned to the client, e.g.
    "'rating' must be a number between 0 and 5". Create requests answer with
    the bare reason as text/plain (plain_text=True); every other rejection is
    wrapped as {"error": {"message": reason}}.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        plain_text: bool = False,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.plain_text = plain_text


class NotFoundError(BookmarksError):
    """
    Raised when a requested bookmark does not exist.

    HTTP:    404 Not Found

    The message is fixed so that responses never reveal anything about the
    identifier that was looked up; the id is kept in context for logging.
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Bookmark Not Found", context=ctx)
        self.resource_id = resource_id


class StoreError(BookmarksError):
    """
    Raised when the backing store fails.

    HTTP:    500 Internal Server Error

    Never retried. In production the response body is generic; detailed
    context (operation, driver error type) is logged server-side.
    """

    def __init__(
        self,
        message: str = "A storage error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def server_error_body(exc: Exception, expose_details: bool) -> Dict[str, Any]:
    """
    Format the JSON body of a 500 response.

    Args:
        exc:             The exception that escaped request handling.
        expose_details:  True outside production (Settings.expose_error_details).

    Returns:
        {"error": {"message": "server error"}} when details are hidden,
        otherwise the exception message plus its type and context.
    """
    if not expose_details:
        return {"error": {"message": "server error"}}

    message = exc.message if isinstance(exc, BookmarksError) else str(exc)
    context = exc.context if isinstance(exc, BookmarksError) else {}
    return {
        "message": message,
        "error": {
            "type": type(exc).__name__,
            "context": context,
        },
    }
