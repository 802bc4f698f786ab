"""
HeroVault Backend - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() builds the engine, one DocumentStore
       per entity, the services around them, the middleware chain, the
       exception handlers and the routers.
Who:   Called by uvicorn (uvicorn herovault.main:app) and by the tests.
When:  Once at server startup; the returned app handles all requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  /api/ben   /api/superheroes   /upload   /health    │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Store→500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables, log readiness
    Shutdown: dispose the engine (close pooled connections)
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

from herovault import __version__
from herovault.config import Settings, settings as default_settings
from herovault.database import (
    create_engine_from_settings,
    create_session_factory,
    create_tables,
    dispose_engine,
)
from herovault.exceptions import (
    HeroVaultError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from herovault.middleware.logging import RequestLoggingMiddleware
from herovault.middleware.request_id import RequestIDMiddleware, request_id_var
from herovault.models.character import Character
from herovault.models.image import Image
from herovault.models.superhero import Superhero
from herovault.routes import characters, health, images, superheroes
from herovault.services.character_service import CharacterService
from herovault.services.document_store import DocumentStore
from herovault.services.image_service import ImageService
from herovault.services.superhero_service import SuperheroService
from herovault.services.upload_service import UploadService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (collected by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    engine: AsyncEngine = app.state.engine

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("=" * 60)
    logger.info("HeroVault Backend starting up...")

    # No migrations: tables are created if they do not exist yet
    await create_tables(engine)
    logger.info("Record tables ready")

    logger.info(
        "Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port
    )
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("HeroVault Backend shutting down...")
    await dispose_engine(engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and a single error body shape.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (FastAPI's schema errors)
        NotFoundError           → 404 Not Found
        StoreError              → 500 Internal Server Error (+ detail if enabled)
        HeroVaultError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error
    """

    def error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content={
                "error": error,
                "message": message,
                "details": details,
                "request_id": request_id_var.get(""),
            },
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        converted = ValidationError.from_errors(list(exc.errors()))
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), converted.message)
        return error_response(400, "validation_error", converted.message, converted.context)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error(
            "[%s] Store error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        details = None
        if request.app.state.settings.expose_error_details:
            details = {"error": exc.context.get("error", exc.message)}
        return error_response(500, "server_error", exc.message, details)

    @app.exception_handler(HeroVaultError)
    async def handle_app_error(request: Request, exc: HeroVaultError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        details = None
        if request.app.state.settings.expose_error_details:
            details = {"error": str(exc)}
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
            details,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module singleton.
        engine:       Pre-built async engine (tests pass an in-memory SQLite
                      engine); defaults to one built from the settings.

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or default_settings
    engine = engine or create_engine_from_settings(app_settings)

    app = FastAPI(
        title="HeroVault API",
        description=(
            "Create, read, update and delete character, superhero and image "
            "records. Images are stored inline and returned as data URIs."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Store Handles & Services ──────────────────────────────────────────
    session_factory = create_session_factory(engine)
    timeout = app_settings.store_timeout_seconds

    app.state.settings = app_settings
    app.state.engine = engine
    app.state.upload_service = UploadService(max_upload_size=app_settings.max_upload_size)
    app.state.character_service = CharacterService(
        DocumentStore(session_factory, Character, timeout=timeout)
    )
    app.state.superhero_service = SuperheroService(
        DocumentStore(session_factory, Superhero, timeout=timeout)
    )
    app.state.image_service = ImageService(
        DocumentStore(session_factory, Image, timeout=timeout)
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(characters.router)
    app.include_router(superheroes.router)
    app.include_router(images.router)
    app.include_router(health.router)

    return app


# uvicorn expects `herovault.main:app` to be importable
app = create_app()
