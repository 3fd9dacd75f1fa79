"""
Bookmarks API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance; a module-level `app` is built from the global settings.
Who:   Called by uvicorn (uvicorn bookmarks_api.main:app) and by the tests.

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware Chain:                                        │
    │  Request ID → Logging → Security Headers → Bearer Token   │
    │             → CORS → GZip                                 │
    │                                                           │
    │  Routes:                                                  │
    │  /bookmarks  /bookmarks/{id}  /  /health                  │
    │                                                           │
    │  Exception Handlers:                                      │
    │  ValidationError→400 │ NotFoundError→404 │ Store/other→500│
    └───────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration
    Shutdown: dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from bookmarks_api import __version__
from bookmarks_api.config import Settings, settings
from bookmarks_api.database import dispose_engine
from bookmarks_api.exceptions import (
    NotFoundError,
    StoreError,
    ValidationError,
    server_error_body,
)
from bookmarks_api.middleware.auth import BearerTokenMiddleware
from bookmarks_api.middleware.logging import RequestLoggingMiddleware
from bookmarks_api.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from bookmarks_api.middleware.security_headers import SecurityHeadersMiddleware
from bookmarks_api.routes import bookmarks, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    Handler: stdout (container runtimes capture it), with RequestIDLogFilter
             so access, audit and error lines share the request ID.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party libraries log every operation at DEBUG/INFO
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
    Startup:  logging, configuration check, banner.
    Shutdown: close every pooled database connection.

    A missing API token is logged but does not stop the server: /health
    keeps answering and every other route answers 401.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Bookmarks API %s starting up (%s)...", __version__, app_settings.environment)

    try:
        app_settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("Bookmarks API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI, expose_details: bool) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError  → 400 (plain-text reason on create, JSON envelope otherwise)
        NotFoundError    → 404 {"error": {"message": "Bookmark Not Found"}}
        StoreError       → 500 via server_error_body()
        Exception        → 500 via server_error_body()

    Args:
        expose_details: include exception message/type/context in 500
                        bodies; passed in explicitly from Settings.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        if exc.plain_text:
            return PlainTextResponse(exc.message, status_code=400)
        return JSONResponse(
            status_code=400,
            content={"error": {"message": exc.message}},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"error": {"message": exc.message}},
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("Store error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=server_error_body(exc, expose_details),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged server-side only."""
        # Runs outside RequestIDMiddleware, after the ContextVar is reset
        rid = getattr(request.state, "request_id", "")
        logger.error(
            "Unexpected error: %s", str(exc), exc_info=True, extra={"request_id": rid}
        )
        return JSONResponse(
            status_code=500,
            content=server_error_body(exc, expose_details),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: configuration for this instance; tests pass their own
                      to exercise other environments or tokens.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="Bookmarks API",
        description="CRUD service for titled, rated web bookmarks.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → SecurityHeaders
    # → BearerToken → CORS → GZip
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(BearerTokenMiddleware, api_token=app_settings.api_token)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app, expose_details=app_settings.expose_error_details)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookmarks.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
