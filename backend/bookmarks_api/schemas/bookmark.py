"""
Bookmarks API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract and the record passed
       between validator, store adapter and sanitizer.
How:   FastAPI uses these models to serialize responses and generate the
       OpenAPI documentation.

Request bodies are deliberately NOT parsed into Pydantic models: the
validator needs the raw mapping to tell "absent" apart from "falsy" and to
return the exact, ordered reason strings the API promises.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Domain Record: what the store holds and the API returns
# ══════════════════════════════════════════════════════════════════════════


class BookmarkRecord(BaseModel):
    """
    What:  Full representation of a bookmark.
    Who:   Produced by validate_create(), returned by every store read,
           cleaned by sanitize_bookmark() before it leaves the service.
    """
    id: str = Field(description="Unique bookmark identifier (UUID4)")
    title: str = Field(description="Non-empty title")
    url: str = Field(description="Absolute http/https URL")
    description: Optional[str] = Field(
        default=None,
        description="Optional free-text description (null when absent)",
    )
    rating: int = Field(ge=0, le=5, description="Rating from 0 to 5 inclusive")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models (documented in OpenAPI)
# ══════════════════════════════════════════════════════════════════════════


class ErrorMessage(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    Envelope used for 404s, PATCH rejections and production 500s.

    Example:
        {"error": {"message": "Bookmark Not Found"}}
    """
    error: ErrorMessage


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
