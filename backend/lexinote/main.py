"""
LexiNote Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers;
       the lifespan handler owns the schema migration, the shared HTTP
       client and the AI dispatch facade.
Who:   uvicorn (`uvicorn lexinote.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐             │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │             │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘             │
    │                                                          │
    │  Routes:                                                 │
    │  /api/ai/*   /api/notes   /api/hard-words   /api/providers│
    │  /health                                                 │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ValidationError→400 │ NotFound→404 │ Database→500       │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → alembic upgrade head → httpx.AsyncClient → AIService
    Shutdown: close the HTTP client → dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from lexinote import __version__
from lexinote.config import settings
from lexinote.database import dispose_engine, upgrade_schema
from lexinote.exceptions import (
    DatabaseError,
    LexiNoteError,
    NotFoundError,
    ValidationError,
)
from lexinote.middleware.logging import RequestLoggingMiddleware
from lexinote.middleware.request_id import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from lexinote.routes import ai, health, notes, providers
from lexinote.services.ai_service import build_ai_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    `request_id` is filled by RequestIDLogFilter ("-" outside a request).
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Per-request chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    # httpx logs full request URLs at INFO; Gemini URLs carry the API key
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Apply pending Alembic migrations
        3. Open one httpx.AsyncClient shared by the vendor adapters
        4. Build the AI dispatch facade on app.state

    Shutdown:
        1. Close the HTTP client (drains pooled vendor connections)
        2. Dispose the database engine
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("LexiNote Backend %s starting up...", __version__)

    await upgrade_schema()
    logger.info("Database migrated to head: %s", settings.database_url.split("///")[-1])

    http_client = httpx.AsyncClient()
    app.state.http_client = http_client
    app.state.ai_service = build_ai_service(http_client)
    logger.info("AI vendors registered: %s", ", ".join(app.state.ai_service.vendors))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("LexiNote Backend shutting down...")
    await http_client.aclose()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy onto HTTP responses.

    Handler hierarchy:
        ValidationError       → 400 Bad Request
        NotFoundError         → 404 Not Found
        DatabaseError         → 500 (generic message, details logged)
        LexiNoteError (base)  → 500
        Exception (fallback)  → 500 (stack trace logged, never returned)

    The AI routes never reach these: the dispatch facade answers with a
    TaskResponse for every vendor or configuration failure.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
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
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(LexiNoteError)
    async def handle_app_error(request: Request, exc: LexiNoteError):
        rid = request_id_var.get("")
        logger.error("%s: %s | Context: %s", type(exc).__name__, exc.message, exc.context)
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
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build their own instance and swap dependencies through
    app.dependency_overrides.
    """
    app = FastAPI(
        title="LexiNote API",
        description=(
            "Notes backend with AI vocabulary help: simplify text, suggest "
            "simpler words and flag hard words through OpenAI, Gemini or Anthropic."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(ai.router)
    app.include_router(notes.router)
    app.include_router(providers.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
