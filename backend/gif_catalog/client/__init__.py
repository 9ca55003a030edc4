# Client package init
"""
Gif Catalog Client
===================

The browser-side half of the catalog, expressed as Python components:
an httpx API client plus view components that hold state and render HTML.
"""

from gif_catalog.client.api_client import GifsApiClient
from gif_catalog.client.components import GifsForm, GifsIndex, GifTile, log_fetch_error

__all__ = ["GifsApiClient", "GifsForm", "GifsIndex", "GifTile", "log_fetch_error"]
