"""
Bookmarks API — Bookmark Service (Request Orchestrator)
=========================================================

What:  Runs validate → store → sanitize for every bookmark operation.
How:   Stateless methods that receive the BookmarkStore for each call.
Who:   Called by the /bookmarks route handlers; calls the validator, the
       injected store and the sanitizer.

Orchestration Flow:
    write:  payload ──▶ validator ──▶ store.insert/update/delete ──▶ audit log
    read:   store.list_all/get_by_id ──▶ sanitizer ──▶ response

    Each step awaits the previous one; there is no parallelism inside a
    request and no state kept between requests.

Audit Log:
    Successful writes and every rejection are recorded on the
    "bookmarks_api.audit" logger with the affected id or offending field.
"""

import logging
from typing import Any, List, Mapping

from bookmarks_api.exceptions import NotFoundError, ValidationError
from bookmarks_api.schemas.bookmark import BookmarkRecord
from bookmarks_api.services.sanitizer import sanitize_bookmark
from bookmarks_api.services.store_base import BookmarkStore
from bookmarks_api.services.validator import validate_create, validate_update

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("bookmarks_api.audit")


class BookmarkService:
    """
    Business logic for the bookmarks collection and item resources.

    Error Handling Strategy:
        ValidationError and NotFoundError are logged to the audit trail and
        re-raised for the global handlers. StoreError raised by the store
        propagates untouched (never retried).
    """

    async def list_bookmarks(self, store: BookmarkStore) -> List[BookmarkRecord]:
        """Return every bookmark, sanitized for output."""
        bookmarks = await store.list_all()
        logger.debug("Listing %d bookmarks", len(bookmarks))
        return [sanitize_bookmark(bookmark) for bookmark in bookmarks]

    async def load_bookmark(self, store: BookmarkStore, bookmark_id: str) -> BookmarkRecord:
        """
        Resolve an id to its raw (unsanitized) stored record.

        This is the shared first step of every item verb.

        Raises:
            NotFoundError: no bookmark has this id (→ 404)
        """
        bookmark = await store.get_by_id(bookmark_id)
        if bookmark is None:
            audit_logger.warning("Bookmark with id %s not found.", bookmark_id)
            raise NotFoundError(resource_id=bookmark_id)
        return bookmark

    async def create_bookmark(
        self, store: BookmarkStore, payload: Mapping[str, Any]
    ) -> BookmarkRecord:
        """
        Validate and insert a new bookmark.

        Returns:
            The created bookmark, sanitized for output. The stored row keeps
            the raw values.

        Raises:
            ValidationError: first missing/invalid field (plain-text 400)
        """
        try:
            bookmark = validate_create(payload)
        except ValidationError as e:
            audit_logger.warning("Rejected bookmark create (field=%s): %s", e.field, e.message)
            raise

        created = await store.insert(bookmark)
        audit_logger.info("Bookmark with id %s created", created.id)
        return sanitize_bookmark(created)

    async def update_bookmark(
        self, store: BookmarkStore, bookmark_id: str, payload: Mapping[str, Any]
    ) -> None:
        """
        Apply a partial update to an already-loaded bookmark.

        Raises:
            ValidationError: empty update or invalid supplied field
            NotFoundError: the row vanished between load and update
        """
        try:
            changes = validate_update(payload)
        except ValidationError as e:
            audit_logger.warning(
                "Rejected update of bookmark %s (field=%s): %s", bookmark_id, e.field, e.message
            )
            raise

        affected = await store.update(bookmark_id, changes)
        if affected == 0:
            audit_logger.warning("Bookmark with id %s disappeared before update.", bookmark_id)
            raise NotFoundError(resource_id=bookmark_id)
        audit_logger.info(
            "Bookmark with id %s updated (%s)", bookmark_id, ", ".join(sorted(changes))
        )

    async def delete_bookmark(self, store: BookmarkStore, bookmark_id: str) -> None:
        """
        Delete an already-loaded bookmark.

        Raises:
            NotFoundError: the row vanished between load and delete
        """
        affected = await store.delete_by_id(bookmark_id)
        if affected == 0:
            audit_logger.warning("Bookmark with id %s disappeared before delete.", bookmark_id)
            raise NotFoundError(resource_id=bookmark_id)
        audit_logger.info("Bookmark with id %s deleted.", bookmark_id)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless; the store is passed to each call
bookmark_service = BookmarkService()
