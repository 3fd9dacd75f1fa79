"""
Bookmarks API — Bookmark Route Handlers
=========================================

What:  HTTP surface for the /bookmarks collection and /bookmarks/{id} items.
How:   Extracts the body / path id, delegates to BookmarkService, and sets
       status codes and the Location header. Errors are raised as exceptions
       and formatted by the global handlers in main.py.

Route Inventory:
    GET     /bookmarks        200  sanitized list
    POST    /bookmarks        201  Location: {path}/{id}, sanitized record
    GET     /bookmarks/{id}   200  sanitized record
    DELETE  /bookmarks/{id}   204
    PATCH   /bookmarks/{id}   204

Every item route depends on load_bookmark, so an unknown id answers 404
before the verb-specific work starts.
"""

import logging
import posixpath
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from bookmarks_api.dependencies import get_bookmark_store, load_bookmark, read_json_object
from bookmarks_api.schemas.bookmark import BookmarkRecord, ErrorResponse
from bookmarks_api.services.bookmark_service import bookmark_service
from bookmarks_api.services.sanitizer import sanitize_bookmark
from bookmarks_api.services.store_base import BookmarkStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Bookmarks"])

_NOT_FOUND = {404: {"description": "Bookmark not found", "model": ErrorResponse}}


@router.get(
    "/bookmarks",
    response_model=List[BookmarkRecord],
    summary="List all bookmarks",
)
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> List[BookmarkRecord]:
    return await bookmark_service.list_bookmarks(store)


@router.post(
    "/bookmarks",
    status_code=201,
    response_model=BookmarkRecord,
    responses={
        201: {"description": "Bookmark created", "model": BookmarkRecord},
        400: {
            "description": "Missing or invalid field; the body is the literal reason",
            "content": {"text/plain": {"example": "'title' is required"}},
        },
    },
    summary="Create a bookmark",
)
async def create_bookmark(
    request: Request,
    response: Response,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkRecord:
    """
    Create a bookmark from {title, url, rating, description?}.

    The Location header is the request path joined with the new id, so a
    mounted prefix (e.g. /api/bookmarks) is preserved.
    """
    payload = await read_json_object(request)
    created = await bookmark_service.create_bookmark(store, payload)
    response.headers["Location"] = posixpath.join(request.url.path, created.id)
    return created


@router.get(
    "/bookmarks/{bookmark_id}",
    response_model=BookmarkRecord,
    responses=_NOT_FOUND,
    summary="Get a single bookmark",
)
async def get_bookmark(
    bookmark: BookmarkRecord = Depends(load_bookmark),
) -> BookmarkRecord:
    return sanitize_bookmark(bookmark)


@router.delete(
    "/bookmarks/{bookmark_id}",
    status_code=204,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark: BookmarkRecord = Depends(load_bookmark),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    await bookmark_service.delete_bookmark(store, bookmark.id)
    return Response(status_code=204)


@router.patch(
    "/bookmarks/{bookmark_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Empty or invalid update", "model": ErrorResponse},
        **_NOT_FOUND,
    },
    summary="Partially update a bookmark",
)
async def update_bookmark(
    request: Request,
    bookmark: BookmarkRecord = Depends(load_bookmark),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Response:
    """
    Change only the supplied fields among title, url, description, rating.
    Unrecognized keys are ignored.
    """
    payload = await read_json_object(request)
    await bookmark_service.update_bookmark(store, bookmark.id, payload)
    return Response(status_code=204)
