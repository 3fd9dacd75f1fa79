# Routes package init
"""
Bookmarks API — API Routes Package
====================================

Route Inventory:
    - bookmarks.py:  GET/POST   /bookmarks
                     GET/DELETE/PATCH /bookmarks/{id}
    - health.py:     GET /        (greeting)
                     GET /health  (service health check)

Routes are thin: they read the request, call BookmarkService, and set
status codes and headers. Business rules live in services/.
"""
