"""
NoteApp Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware, route mounting and lifecycle.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance whose repositories live on app.state.
Who:   uvicorn (uvicorn noteapp.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │  Req ID  │→│ Logging  │→│ Session (cookie)    │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /  /register  /login  /logout  /notes  /edit       │
    │  /delete  /health  /static/*                        │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/AlreadyExists/DuplicateName → 400       │
    │  InvalidCredentials → 401                           │
    │  NotAuthenticated → 303 /                           │
    │  Storage/Format/Template → 500                      │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from noteapp import __version__
from noteapp.config import Settings, settings as default_settings
from noteapp.exceptions import (
    AlreadyExistsError,
    DuplicateNameError,
    FormatError,
    InvalidCredentialsError,
    NoteAppError,
    NotAuthenticatedError,
    StorageError,
    TemplateRenderError,
    ValidationError,
)
from noteapp.middleware.logging import RequestLoggingMiddleware
from noteapp.middleware.request_id import RequestIDMiddleware, request_id_var
from noteapp.routes import auth, health, notes, pages
from noteapp.services.file_store import FileStore
from noteapp.services.note_service import NoteRepository
from noteapp.services.user_service import UserRepository
from noteapp.templating import create_templates

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # noteapp.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Validate critical configuration (logged, not fatal)
        3. Create the data directory
    """
    cfg: Settings = app.state.settings

    setup_logging(cfg.log_level)
    logger.info("=" * 60)
    logger.info("NoteApp starting up...")

    try:
        cfg.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    cfg.data_path.mkdir(parents=True, exist_ok=True)
    logger.info("Data directory: %s", cfg.data_path.resolve())
    logger.info("Server ready at http://%s:%d", cfg.backend_host, cfg.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("NoteApp shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "request_id": request_id_var.get(""),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        NotAuthenticatedError   → 303 redirect to "/"
        ValidationError         → 400 Bad Request
        AlreadyExistsError      → 400 Bad Request
        DuplicateNameError      → 400 Bad Request
        InvalidCredentialsError → 401 Unauthorized
        StorageError            → 500 (details logged only)
        FormatError             → 500 (details logged only)
        TemplateRenderError     → 500
        NoteAppError (base)     → 500
        Exception (fallback)    → 500
    """

    @app.exception_handler(NotAuthenticatedError)
    async def handle_not_authenticated(request: Request, exc: NotAuthenticatedError):
        """Anonymous visitor on a notes page: send them to the landing page."""
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message)

    @app.exception_handler(AlreadyExistsError)
    async def handle_already_exists(request: Request, exc: AlreadyExistsError):
        return _error_response(400, "already_exists", exc.message)

    @app.exception_handler(DuplicateNameError)
    async def handle_duplicate_name(request: Request, exc: DuplicateNameError):
        return _error_response(400, "duplicate_name", exc.message)

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return _error_response(401, "invalid_credentials", exc.message)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "storage_error", exc.message)

    @app.exception_handler(FormatError)
    async def handle_format_error(request: Request, exc: FormatError):
        rid = request_id_var.get("")
        logger.error("[%s] Format error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "format_error", exc.message)

    @app.exception_handler(TemplateRenderError)
    async def handle_template_error(request: Request, exc: TemplateRenderError):
        rid = request_id_var.get("")
        logger.error("[%s] Template error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "template_error", exc.message)

    @app.exception_handler(NoteAppError)
    async def handle_app_error(request: Request, exc: NoteAppError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Stack trace is logged server-side ONLY (never in response)."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded
                  singleton. Tests pass their own with a temporary data_dir.
    """
    cfg = settings or default_settings

    app = FastAPI(
        title="NoteApp",
        description="Register, log in and keep a personal list of named text notes.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    store = FileStore()
    app.state.settings = cfg
    app.state.store = store
    app.state.users = UserRepository(store, cfg.users_path)
    app.state.notes = NoteRepository(
        store,
        cfg.data_path,
        reserved=app.state.users.reserved_names,
    )
    app.state.templates = create_templates(cfg.templates_dir)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → Session
    app.add_middleware(
        SessionMiddleware,
        secret_key=cfg.session_secret,
        session_cookie=cfg.session_cookie,
        max_age=cfg.session_max_age,
        same_site="lax",
        https_only=cfg.session_https_only,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=cfg.static_dir), name="static")

    return app


app = create_app()
