"""
Bookmarks API — Output Sanitizer
==================================

What:  Neutralizes HTML in the free-text fields of a bookmark before it is
       returned to a client.
How:   bleach Cleaner with a small allow-list of inline tags. Tags outside the
       list are escaped (<script> → &lt;script&gt;); attributes outside the list
       (onerror, style, ...) are dropped; existing entities are preserved, so
       cleaning is idempotent.
When:  On every read path (list, item, create response). Stored values are
       left untouched, so each read cleans the raw value again.

Only title and description are cleaned; id, url and rating pass through.
"""

from bleach.sanitizer import Cleaner

from bookmarks_api.schemas.bookmark import BookmarkRecord

ALLOWED_TAGS = frozenset({"a", "b", "i", "em", "strong", "img"})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "img": ["src", "alt", "title"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_cleaner = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)


def sanitize_text(value: str | None) -> str | None:
    """Clean a single text value; None stays None."""
    if value is None:
        return None
    return _cleaner.clean(value)


def sanitize_bookmark(bookmark: BookmarkRecord) -> BookmarkRecord:
    """Return a copy of bookmark with title and description cleaned."""
    return bookmark.model_copy(
        update={
            "title": sanitize_text(bookmark.title),
            "description": sanitize_text(bookmark.description),
        }
    )
