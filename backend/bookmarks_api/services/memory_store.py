"""In-memory BookmarkStore used by the test suite and for local experiments."""

from typing import Any, Dict, Iterable, List, Optional

from bookmarks_api.schemas.bookmark import BookmarkRecord
from bookmarks_api.services.store_base import BookmarkStore


class InMemoryBookmarkStore(BookmarkStore):
    """
    Dict-backed store. Each instance owns its own data; create one per test
    (or per app) and inject it through the get_bookmark_store dependency.

    Records are copied on the way in and out so callers can never mutate
    stored state by accident.
    """

    def __init__(self, bookmarks: Iterable[BookmarkRecord] = ()):
        self._rows: Dict[str, BookmarkRecord] = {}
        for bookmark in bookmarks:
            self._rows[bookmark.id] = bookmark.model_copy()

    async def list_all(self) -> List[BookmarkRecord]:
        return [row.model_copy() for row in self._rows.values()]

    async def get_by_id(self, bookmark_id: str) -> Optional[BookmarkRecord]:
        row = self._rows.get(bookmark_id)
        return row.model_copy() if row is not None else None

    async def insert(self, bookmark: BookmarkRecord) -> BookmarkRecord:
        self._rows[bookmark.id] = bookmark.model_copy()
        return bookmark.model_copy()

    async def update(self, bookmark_id: str, fields: Dict[str, Any]) -> int:
        row = self._rows.get(bookmark_id)
        if row is None:
            return 0
        self._rows[bookmark_id] = row.model_copy(update=fields)
        return 1

    async def delete_by_id(self, bookmark_id: str) -> int:
        if self._rows.pop(bookmark_id, None) is None:
            return 0
        return 1
