"""
Word REST API: FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers; the
       lifespan owns the database session manager.
Who:   uvicorn (`uvicorn word_rest_api.main:app`) or the `word-rest-api`
       console script (run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│  Access Log  │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌────────────┐ ┌───────┐ │
    │  │ /api/    │ │ /api/    │ │ /api/      │ │/health│ │
    │  │ users    │ │ posts    │ │ vocabulary │ │       │ │
    │  └──────────┘ └──────────┘ └────────────┘ └───────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ WordApiError→status │ RequestValidation→400   │  │
    │  │ Exception→500                                 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Build the DatabaseSessionManager (app.state.db)
    3. ensure_schema(): create missing tables/indexes; failure aborts startup
    4. Optionally seed sample vocabulary

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from word_rest_api import __version__
from word_rest_api.config import Settings, settings as default_settings
from word_rest_api.database import DatabaseSessionManager
from word_rest_api.exceptions import (
    InternalError,
    ServiceUnavailableError,
    ValidationError,
    WordApiError,
)
from word_rest_api.middleware.logging import RequestLoggingMiddleware
from word_rest_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from word_rest_api.routes import health, posts, users, vocabulary
from word_rest_api.schema import ensure_schema, seed_vocabulary
from word_rest_api.validation import details_from_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings) -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] word_rest_api.access: GET /api/users 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if config.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Own the database session manager for the lifetime of the app.

    A failure in ensure_schema() propagates and the server does not start.
    """
    config: Settings = app.state.settings
    setup_logging(config)
    logger.info("Word REST API %s starting up (environment: %s)", __version__, config.environment)

    db = DatabaseSessionManager(config)
    app.state.db = db
    try:
        await ensure_schema(db.engine)
        if config.seed_vocabulary:
            async with db.session() as session:
                await seed_vocabulary(session)
    except Exception:
        logger.critical("Database initialization failed; aborting startup", exc_info=True)
        await db.dispose()
        raise

    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)

    try:
        yield
    finally:
        logger.info("Word REST API shutting down...")
        await db.dispose()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(exc: WordApiError) -> JSONResponse:
    headers = {}
    rid = request_id_var.get("")
    if rid:
        headers[REQUEST_ID_HEADER] = rid
    if isinstance(exc, ServiceUnavailableError):
        headers["Retry-After"] = str(exc.retry_after)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the {"error": {"code", "message"}} body.

    Handler hierarchy:
        WordApiError            → its own status_code / code
        RequestValidationError  → 400 VALIDATION_ERROR with per-field details
        Exception (fallback)    → 500 INTERNAL_ERROR, generic message

    `context` and stack traces are logged server-side only.
    """

    @app.exception_handler(WordApiError)
    async def handle_api_error(request: Request, exc: WordApiError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.code, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, exc.code, exc.message)
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(details=details_from_errors(exc.errors()))
        logger.info(
            "[%s] Validation failed on %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            ", ".join(error.fields),
        )
        return _error_response(error)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            exc,
            exc_info=True,
        )
        return _error_response(InternalError())


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: overrides the module-level settings (tests pass one pointing
                  at a temporary SQLite database)
    """
    config = settings or default_settings

    app = FastAPI(
        title="Word REST API",
        description="CRUD API for users, posts and English/Japanese vocabulary.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = config

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials="*" not in config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Retry-After"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(vocabulary.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn on BACKEND_HOST:BACKEND_PORT."""
    import uvicorn

    uvicorn.run(
        "word_rest_api.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )
