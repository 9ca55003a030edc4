"""
Gif Catalog Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires settings, the database engine,
       the GifStore, middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn gif_catalog.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ GET/POST /api/v1/gifs    │ │ GET /health     │   │
    │  │ GET /api/v1/gifs/{id}    │ └─────────────────┘   │
    │  └──────────────────────────┘                       │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→422 │ NotFound→404 │ Database→500       │
    │                                                     │
    │  app.state: settings, engine, gif_store             │
    └─────────────────────────────────────────────────────┘

The engine and store are built inside create_app(), not in the lifespan,
so an app driven through httpx's ASGITransport (which does not run the
lifespan) is fully usable.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from gif_catalog import __version__
from gif_catalog.config import Settings, settings as default_settings
from gif_catalog.database import (
    build_engine,
    build_session_factory,
    create_schema,
    dispose_engine,
)
from gif_catalog.exceptions import (
    DatabaseError,
    GifCatalogError,
    NotFoundError,
    ValidationError,
)
from gif_catalog.middleware.logging import RequestLoggingMiddleware
from gif_catalog.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from gif_catalog.routes import gifs, health
from gif_catalog.services.gif_store import GifStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings) -> None:
    """
    Configure root logging once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    (container log collectors read stdout).
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, optionally create tables.
    Shutdown: dispose the engine so pooled connections are closed.
    """
    config: Settings = app.state.settings
    setup_logging(config)
    logger.info("Gif Catalog backend starting up (version %s)", __version__)

    if config.db_create_all:
        await create_schema(app.state.engine)
        logger.info("Database schema ensured (DB_CREATE_ALL)")

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    yield

    logger.info("Gif Catalog backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy to JSON error responses.

        ValidationError         → 422 (with `errors` list)
        NotFoundError           → 404
        DatabaseError           → 500, generic message
        GifCatalogError (base)  → 500
        Exception (fallback)    → 500, stack trace logged only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_error",
                "message": exc.message,
                "errors": exc.errors,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(GifCatalogError)
    async def handle_app_error(request: Request, exc: GifCatalogError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to use; defaults to the module-level `settings`.

    Returns:
        A FastAPI instance whose `state` holds `settings`, `engine` and the
        `gif_store` the routes depend on.
    """
    config = config or default_settings

    app = FastAPI(
        title="Gif Catalog API",
        description="List, create and view named gifs with like counts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    engine = build_engine(config)
    app.state.settings = config
    app.state.engine = engine
    app.state.gif_store = GifStore(build_session_factory(engine))

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(gifs.router)
    app.include_router(health.router)

    return app


# uvicorn expects `gif_catalog.main:app` to be importable
app = create_app()
