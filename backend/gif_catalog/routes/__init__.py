# Routes package init
"""
Gif Catalog Backend — API Routes Package
=========================================

Route Inventory:
    - gifs.py:    GET  /api/v1/gifs            (list, most liked first)
                  POST /api/v1/gifs            (create)
                  GET  /api/v1/gifs/{id}       (show)
    - health.py:  GET  /health                 (service health check)

Routes stay thin: parse the request, call GifStore, return a schema.
Validation rules and SQL live in the store.
"""
