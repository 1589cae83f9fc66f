"""
Noteful Backend — FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn noteful.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌──────┐     │
    │  │ Req ID   │→│  Logging    │→│ GZip │→│ CORS │     │
    │  └──────────┘ └─────────────┘ └──────┘ └──────┘     │
    │                                                     │
    │  Routes:                                            │
    │  /api/notes   /api/folders   /api/tags   /health    │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Database→500       │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from noteful import __version__
from noteful.config import settings
from noteful.database import dispose_engine
from noteful.exceptions import (
    DatabaseError,
    NotefulError,
    NotFoundError,
    ValidationError,
)
from noteful.middleware.logging import RequestLoggingMiddleware
from noteful.middleware.request_id import RequestIDMiddleware, request_id_var
from noteful.routes import health, notes
from noteful.routes.catalog import folders_router, tags_router

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] noteful.services.note_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Noteful Backend %s starting up...", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Noteful Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# Messages for the body problems clients hit most often
_KNOWN_BODY_ERRORS = {
    ("title", "missing"): "Missing `title` in request body",
    ("title", "string_too_short"): "Missing `title` in request body",
    ("title", "string_too_long"): "`title` must be at most 255 characters",
    ("tags", "list_type"): "Tags must be passed as an array",
    ("name", "missing"): "Missing `name` in request body",
    ("name", "string_too_short"): "Missing `name` in request body",
    ("name", "string_too_long"): "`name` must be at most 255 characters",
}


def describe_request_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Flatten FastAPI/Pydantic request errors into our validation_error payload.

    Returns a dict with a one-line `message` (from the first error) and the
    per-field `errors` list used as response details.
    """
    items: List[Dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        # Drop the "body"/"query"/"path" prefix for the field name
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        items.append({"field": field, "message": str(err.get("msg", "")), "type": str(err.get("type", ""))})

    if not items:
        return {"message": "Invalid request", "errors": []}

    first = items[0]
    top_field = first["field"].split(".")[0]
    message = _KNOWN_BODY_ERRORS.get(
        (top_field, first["type"]),
        f"Invalid request: {first['field']}: {first['message']}",
    )
    return {"message": message, "errors": items}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and response bodies.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        DatabaseError                            → 500 (generic message)
        NotefulError (base)                      → 500
        Exception (fallback)                     → 500 (stack trace logged)

    Internal details (SQL, driver errors) never reach the response body.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Schema violations are client errors: 400 with per-field details."""
        rid = request_id_var.get("")
        described = describe_request_errors(exc.errors())
        logger.warning("[%s] Validation error: %s", rid, described["message"])
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": described["message"],
                "details": {"errors": described["errors"]},
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

    @app.exception_handler(NotefulError)
    async def handle_app_error(request: Request, exc: NotefulError):
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
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Noteful API",
        description=(
            "Notes organised in folders and tagged with any number of tags. "
            "List, search, create, update and delete notes, folders and tags."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(folders_router)
    app.include_router(tags_router)
    app.include_router(health.router)

    return app


# uvicorn expects `noteful.main:app` to be importable
app = create_app()
