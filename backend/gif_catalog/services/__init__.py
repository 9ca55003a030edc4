# Services package init
"""
Gif Catalog Backend — Services Layer
=====================================

Business rules between the routes (HTTP) and the database (persistence).

Service Inventory:
    - GifStore: validation and persistence of Gif records

Services never see Request or Response objects, so they are tested
directly against a database without going through HTTP.
"""

from gif_catalog.services.gif_store import GifStore

__all__ = ["GifStore"]
