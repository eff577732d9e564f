"""
Voxboard Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, the service
       objects (stored on app.state) and the routers.
Who:   uvicorn (`uvicorn voxboard.main:app`) and the test suite.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:  Request ID -> Logging -> GZip -> CORS  │
    │                                                      │
    │  app.state:   synthesizer, blob_store, text_generator│
    │               + one service per resource             │
    │                                                      │
    │  Routes:      /soundboards  /history  /profile       │
    │               /feedback  /report  /generate  /health │
    │                                                      │
    │  Exception handlers: VoxboardError family -> its     │
    │  status code; request validation -> 400; anything    │
    │  else -> 500 with the raw message                    │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging -> config check (logged only) -> SELECT 1 (failure
              aborts startup) -> optional create_all
    Shutdown: dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from voxboard import __version__
from voxboard.config import settings
from voxboard.database import create_all, dispose_engine, verify_connection
from voxboard.exceptions import (
    ExternalServiceError,
    PersistenceError,
    VoxboardError,
)
from voxboard.middleware.logging import RequestLoggingMiddleware
from voxboard.middleware.request_id import RequestIDMiddleware, request_id_var
from voxboard.routes import feedback, generate, health, history, profile, soundboards
from voxboard.schemas.common import ErrorResponse
from voxboard.services.feedback_service import FeedbackService
from voxboard.services.gemini_service import GeminiService
from voxboard.services.history_service import HistoryService
from voxboard.services.profile_service import ProfileService
from voxboard.services.report_service import ReportService
from voxboard.services.soundboard_service import SoundboardService
from voxboard.services.speech_service import GoogleSpeechSynthesizer
from voxboard.services.storage_service import GCSBlobStore

logger = logging.getLogger(__name__)

GENERIC_EXTERNAL_MESSAGE = "An external service failed. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Chatty third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Voxboard Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Endpoints that need the missing value fail individually
        logger.error("Configuration error: %s", str(e))

    try:
        await verify_connection()
    except Exception as e:
        logger.critical("Cannot reach the database: %s", str(e))
        raise

    if settings.database_auto_create:
        await create_all()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Voxboard Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs outside the middleware stack
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(
    request: Request, status_code: int, error: str, message: str, details=None
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the error envelope.

    Handler hierarchy (most specific class wins):
        ValidationError / DuplicateError -> 400, message + details
        NotFoundError                    -> 404, message
        ExternalServiceError             -> 500, generic message
        PersistenceError                 -> 500, generic message
        VoxboardError (base)             -> 500, its own message
        RequestValidationError           -> 400, first validation problem
        HTTPException                    -> its status, its detail
        Exception                        -> 500, raw exception message

    Context of the 500 family is logged server-side only.
    """

    @app.exception_handler(ExternalServiceError)
    async def handle_external_error(request: Request, exc: ExternalServiceError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            _request_id(request),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return _error_response(request, exc.status_code, exc.error_code, GENERIC_EXTERNAL_MESSAGE)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            _request_id(request),
            exc.message,
            exc.context,
        )
        return _error_response(request, exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(VoxboardError)
    async def handle_voxboard_error(request: Request, exc: VoxboardError):
        rid = _request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
            return _error_response(request, exc.status_code, exc.error_code, exc.message)

        logger.warning("[%s] %s: %s", rid, exc.error_code, exc.message)
        return _error_response(
            request, exc.status_code, exc.error_code, exc.message, details=exc.context
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        logger.warning("[%s] Request validation failed: %s", _request_id(request), message)
        return _error_response(
            request,
            400,
            "validation_error",
            message,
            details={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error_response(request, exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=True,
        )
        return _error_response(
            request, 500, "internal_server_error", str(exc) or "Internal server error"
        )


# ══════════════════════════════════════════════════════════════════════════
# Service Wiring
# ══════════════════════════════════════════════════════════════════════════

def install_services(app: FastAPI) -> None:
    """
    Build the adapters and services once and store them on app.state.

    Google clients are created lazily by the adapters, so no credentials are
    needed until the first call.
    """
    synthesizer = GoogleSpeechSynthesizer(settings)
    blob_store = GCSBlobStore(settings)

    app.state.synthesizer = synthesizer
    app.state.blob_store = blob_store
    app.state.text_generator = GeminiService(settings)
    app.state.soundboard_service = SoundboardService(synthesizer, blob_store)
    app.state.history_service = HistoryService()
    app.state.profile_service = ProfileService(blob_store, settings.profile_picture_max_size)
    app.state.feedback_service = FeedbackService()
    app.state.report_service = ReportService()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Voxboard API",
        description=(
            "Soundboards synthesized with Google Text-to-Speech, chat history, "
            "profiles, feedback and reports."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RequestID -> Logging -> GZip -> CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    install_services(app)

    app.include_router(health.router)
    app.include_router(soundboards.router)
    app.include_router(history.router)
    app.include_router(profile.router)
    app.include_router(feedback.router)
    app.include_router(generate.router)

    return app


# uvicorn entry point: `voxboard.main:app`
app = create_app()
