"""
Gif Catalog Backend — Application Package Initializer
=====================================================

What: Marks the `gif_catalog` directory as a Python package.
Why:  Enables module imports like `from gif_catalog.config import settings`.
Who:  Used by Alembic, pytest, uvicorn, and the client components.

Architecture Note:
    The backend keeps a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │        Services (Record Store)      │  ← Validation, persistence rules
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The `client` subpackage sits on the other side of the wire: it talks to
    the API over HTTP and renders the single-page view (form + gif list).
"""

__version__ = "1.0.0"
