"""FastAPI dependencies shared by the bookmark routes."""

import json
import logging
from typing import Any, Dict

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.exceptions import ValidationError
from bookmarks_api.schemas.bookmark import BookmarkRecord
from bookmarks_api.services.bookmark_service import bookmark_service
from bookmarks_api.services.sql_store import SQLBookmarkStore
from bookmarks_api.services.store_base import BookmarkStore

audit_logger = logging.getLogger("bookmarks_api.audit")

NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"


async def get_bookmark_store(
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkStore:
    """
    Provide the BookmarkStore for this request.

    Tests replace this dependency with an InMemoryBookmarkStore through
    app.dependency_overrides.
    """
    return SQLBookmarkStore(db)


async def load_bookmark(
    bookmark_id: str,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkRecord:
    """
    Resolve the {bookmark_id} path segment for every item route.

    Raises:
        NotFoundError: before the route body runs, so every verb answers 404
    """
    return await bookmark_service.load_bookmark(store, bookmark_id)


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Read the request body as an untrusted JSON object.

    An empty body counts as {} so that a bare POST reports the first
    missing field rather than a parse error.

    Raises:
        ValidationError: body is not valid JSON or not an object
    """
    body = await request.body()
    if not body.strip():
        return {}
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        audit_logger.warning(
            "Rejected %s %s: unparseable body (%s)", request.method, request.url.path, type(e).__name__
        )
        raise ValidationError(NOT_AN_OBJECT_MESSAGE)
    if not isinstance(payload, dict):
        audit_logger.warning(
            "Rejected %s %s: body is a JSON %s, not an object",
            request.method,
            request.url.path,
            type(payload).__name__,
        )
        raise ValidationError(NOT_AN_OBJECT_MESSAGE)
    return payload
