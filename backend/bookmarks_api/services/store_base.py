"""
Bookmarks API — Abstract Bookmark Store Interface
===================================================

What:  Abstract base class defining the contract between the request-handling
       core and whatever durably holds bookmarks.
How:   Concrete implementations inherit from BookmarkStore and implement the
       five async operations below.
Who:   Called by BookmarkService; an instance is injected per request by the
       get_bookmark_store dependency.

Implementations:
    - SQLBookmarkStore:       async SQLAlchemy session (production)
    - InMemoryBookmarkStore:  dict-backed, used by the test suite
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bookmarks_api.schemas.bookmark import BookmarkRecord


class BookmarkStore(ABC):
    """
    Async CRUD contract for the bookmarks table.

    Contract:
        - Every method may suspend while the backing store completes I/O.
        - update() and delete_by_id() report rows affected; 0 means the id
          does not exist, and the caller maps that to "not found".
        - Implementations wrap backend failures in StoreError.
        - Ids are assigned by the caller before insert().
    """

    @abstractmethod
    async def list_all(self) -> List[BookmarkRecord]:
        """Return every bookmark; order is stable within one call."""

    @abstractmethod
    async def get_by_id(self, bookmark_id: str) -> Optional[BookmarkRecord]:
        """Return the bookmark with this id, or None."""

    @abstractmethod
    async def insert(self, bookmark: BookmarkRecord) -> BookmarkRecord:
        """Persist a validated bookmark and return it as stored."""

    @abstractmethod
    async def update(self, bookmark_id: str, fields: Dict[str, Any]) -> int:
        """Apply a partial update; return the number of rows affected."""

    @abstractmethod
    async def delete_by_id(self, bookmark_id: str) -> int:
        """Delete a bookmark; return the number of rows affected."""
