"""
Gif Catalog Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.
How:   Every test gets its own file-backed SQLite database (aiosqlite) under
       pytest's tmp_path, so tests never share rows.

Fixture Hierarchy (all function-scoped):
    test_settings ── Settings pointing at the per-test database
    ├── db_engine   ── async engine with the schema created
    │   └── gif_store ── GifStore bound to that engine
    └── test_app    ── create_app(test_settings) with the schema created
        ├── test_client ── httpx AsyncClient over ASGITransport
        └── api_client  ── GifsApiClient over ASGITransport
"""

import os

# Override settings BEFORE any gif_catalog import: gif_catalog.main builds a
# module-level app from the default settings when it is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from gif_catalog.client.api_client import GifsApiClient
from gif_catalog.config import Settings
from gif_catalog.database import build_engine, build_session_factory, create_schema, dispose_engine
from gif_catalog.main import create_app
from gif_catalog.services.gif_store import GifStore


@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated SQLite database file in tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'gifs.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def db_engine(test_settings):
    engine = build_engine(test_settings)
    await create_schema(engine)
    yield engine
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def gif_store(db_engine):
    """
    A GifStore on an empty database.

    Usage:
        async def test_create(gif_store):
            gif = await gif_store.create({"name": "cat", "url": "http://x/cat.gif"})
    """
    return GifStore(build_session_factory(db_engine))


@pytest_asyncio.fixture
async def test_app(test_settings):
    """
    Application built by create_app() with its schema created.

    ASGITransport does not run the lifespan, so the schema is created here
    and the engine disposed on teardown.
    """
    app = create_app(test_settings)
    await create_schema(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    HTTPX AsyncClient routed straight into the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def api_client(test_app):
    """The client-side GifsApiClient talking to the in-process app."""
    async with GifsApiClient(base_url="http://test", transport=ASGITransport(app=test_app)) as client:
        yield client


@pytest.fixture
def cat_gif():
    return {"name": "cat", "url": "http://x/cat.gif"}
