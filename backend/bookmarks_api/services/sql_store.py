"""
Bookmarks API — SQLAlchemy Bookmark Store
===========================================

What:  Production BookmarkStore over an async SQLAlchemy session.
How:   One statement per operation; writes are flushed, and the session
       dependency (get_db_session) commits or rolls back at request end.
Who:   Built per request by bookmarks_api.dependencies.get_bookmark_store.

Error Handling:
    Any SQLAlchemyError is logged with the operation name and re-raised as
    StoreError. The original exception is chained for debugging but its
    text is never put into the StoreError message.

Query plans:
    get_by_id / update / delete:  primary key lookup on bookmarks.id
    list_all:                     full scan ordered by id
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.exceptions import StoreError
from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.schemas.bookmark import BookmarkRecord
from bookmarks_api.services.store_base import BookmarkStore

logger = logging.getLogger(__name__)


class SQLBookmarkStore(BookmarkStore):
    """
    BookmarkStore backed by the `bookmarks` table.

    The session is the opaque connection handle: this class never opens,
    commits or closes it.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[BookmarkRecord]:
        try:
            result = await self.session.execute(select(Bookmark).order_by(Bookmark.id))
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._store_error("list_all", e) from e
        return [BookmarkRecord.model_validate(row) for row in rows]

    async def get_by_id(self, bookmark_id: str) -> Optional[BookmarkRecord]:
        try:
            result = await self.session.execute(
                select(Bookmark).where(Bookmark.id == bookmark_id)
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._store_error("get_by_id", e, bookmark_id) from e
        if row is None:
            return None
        return BookmarkRecord.model_validate(row)

    async def insert(self, bookmark: BookmarkRecord) -> BookmarkRecord:
        row = Bookmark(**bookmark.model_dump())
        try:
            self.session.add(row)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._store_error("insert", e, bookmark.id) from e
        return BookmarkRecord.model_validate(row)

    async def update(self, bookmark_id: str, fields: Dict[str, Any]) -> int:
        try:
            result = await self.session.execute(
                update(Bookmark).where(Bookmark.id == bookmark_id).values(**fields)
            )
        except SQLAlchemyError as e:
            raise self._store_error("update", e, bookmark_id) from e
        return result.rowcount

    async def delete_by_id(self, bookmark_id: str) -> int:
        try:
            result = await self.session.execute(
                delete(Bookmark).where(Bookmark.id == bookmark_id)
            )
        except SQLAlchemyError as e:
            raise self._store_error("delete_by_id", e, bookmark_id) from e
        return result.rowcount

    @staticmethod
    def _store_error(
        operation: str, error: Exception, bookmark_id: Optional[str] = None
    ) -> StoreError:
        logger.error(
            "Store operation %s failed for bookmark %s: %s",
            operation,
            bookmark_id,
            str(error),
        )
        context: Dict[str, Any] = {
            "operation": operation,
            "error_type": type(error).__name__,
        }
        if bookmark_id:
            context["bookmark_id"] = bookmark_id
        return StoreError(
            message=f"Could not complete '{operation}' on the bookmark store.",
            context=context,
        )
