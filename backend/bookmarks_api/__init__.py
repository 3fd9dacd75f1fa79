"""
Bookmarks API — Application Package Initializer
=================================================

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │     Routes + Middleware (HTTP)      │  ← status codes, headers, auth
    ├─────────────────────────────────────┤
    │   Services (validate / sanitize)    │  ← BookmarkService orchestration
    ├─────────────────────────────────────┤
    │     BookmarkStore (interface)       │  ← SQL or in-memory implementation
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
