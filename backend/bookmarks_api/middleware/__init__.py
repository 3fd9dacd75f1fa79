# Middleware package init
"""
Bookmarks API — Middleware Package
====================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [Security Headers] → [Bearer Token]
            → [CORS] → [GZip] → Route Handler

    - Request ID first so every log line, including 401s, carries it
    - Logging records the final status, including auth rejections
    - Security Headers wrap auth so 401 responses are decorated too
    - Bearer Token rejects unauthenticated requests before any route work
"""
