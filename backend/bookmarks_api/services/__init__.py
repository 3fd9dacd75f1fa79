# Services package init
"""
Bookmarks API — Services Package
==================================

    - validator.py:         validate_create / validate_update
    - sanitizer.py:         sanitize_bookmark (bleach)
    - store_base.py:        BookmarkStore abstract interface
    - sql_store.py:         SQLBookmarkStore (async SQLAlchemy)
    - memory_store.py:      InMemoryBookmarkStore (tests)
    - bookmark_service.py:  BookmarkService orchestrator
"""
