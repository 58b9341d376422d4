"""
Noteful API - FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires the database engine, middleware, exception
       handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn noteful.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────┐ ┌──────┐ ┌────────┐  │
    │  │  Req ID      │→│ Logging  │→│ GZip │→│  CORS  │  │
    │  └──────────────┘ └──────────┘ └──────┘ └────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /api/folders │ │ /api, notes  │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Database→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Store injection:
    The engine is created by (or passed to) create_app() and kept on
    `app.state.engine`; `app.state.session_factory` is what the
    get_db_session dependency opens sessions from.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from noteful import __version__
from noteful.config import Settings, settings as default_settings
from noteful.database import (
    build_engine,
    create_session_factory,
    dispose_engine,
    init_models,
)
from noteful.exceptions import (
    NotefulError,
    ValidationError,
    NotFoundError,
    ConstraintError,
    DatabaseError,
)
from noteful.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    current_request_id,
)
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.routes import folders, notes, health

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An unexpected error occurred. Please try again later."
MALFORMED_REQUEST = "Request is malformed"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # Per-query and per-request noise from third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def error_body(message: str) -> dict:
    return {"error": {"message": message}}


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        ConstraintError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed JSON, bad types)
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error (generic message)
        NotefulError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Every body has the shape {"error": {"message": ...}}. Store internals
    and stack traces are logged server-side only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = current_request_id(request)
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(ConstraintError)
    async def handle_constraint_error(request: Request, exc: ConstraintError):
        rid = current_request_id(request)
        logger.warning("[%s] Constraint violation: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = current_request_id(request)
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content=error_body(MALFORMED_REQUEST))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = current_request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(exc.message))

    @app.exception_handler(NotefulError)
    async def handle_app_error(request: Request, exc: NotefulError):
        rid = current_request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content=error_body(GENERIC_SERVER_ERROR))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        # Runs outside RequestIDMiddleware, so the header is not added for us
        return JSONResponse(
            status_code=500,
            content=error_body(GENERIC_SERVER_ERROR),
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    config: Settings = default_settings,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application settings (defaults to the env-loaded singleton).
        engine: Store handle to use. Built from `config.database_url` when
                omitted; tests pass an in-memory SQLite engine.

    Returns:
        Fully configured FastAPI instance.
    """
    if engine is None:
        engine = build_engine(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(config.log_level)
        logger.info("Noteful API starting up (version %s)", __version__)

        if config.create_tables_on_startup:
            await init_models(app.state.engine)
            logger.info("Database tables ensured")

        logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Noteful API shutting down...")
        await dispose_engine(app.state.engine)
        logger.info("Shutdown complete.")

    app = FastAPI(
        title="Noteful API",
        description="Folders and notes with sanitized text output.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(folders.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `noteful.main:app` to be importable
app = create_app()
