"""
Movies API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn movies_api.main:app`) or the `movies-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ GET/POST/PUT/DELETE /movies  │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌────────────────────────────────────────────────┐ │
    │  │ Validation→400 │ NotFound→404 │ Database→500   │ │
    │  └────────────────────────────────────────────────┘ │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the MongoDB client and ping it; abort startup if unreachable
    3. Build the MongoMovieStore and attach it to app.state

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from movies_api import __version__
from movies_api.config import settings
from movies_api.database import (
    create_client,
    dispose_client,
    get_collection,
    verify_connection,
)
from movies_api.exceptions import (
    MoviesAPIError,
    NotFoundError,
    DatabaseError,
)
from movies_api.middleware.request_id import RequestIDMiddleware, request_id_var
from movies_api.middleware.logging import RequestLoggingMiddleware
from movies_api.routes import health, movies
from movies_api.services.mongo_store import MongoMovieStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout,
    at settings.log_level. Called once during startup.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, MongoDB client, startup ping, store on app.state.
    Shutdown: close the client.

    A failed startup ping is logged and re-raised; uvicorn then aborts
    startup and the process exits with a non-zero status.
    """
    setup_logging()
    logger.info("Movies API %s starting up...", __version__)

    client = create_client()
    try:
        await verify_connection(client)
    except Exception:
        logger.critical(
            "Cannot reach MongoDB at %s; aborting startup", settings.mongo_url, exc_info=True
        )
        await dispose_client(client)
        raise

    app.state.mongo_client = client
    app.state.movie_store = MongoMovieStore(get_collection(client))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Movies API shutting down...")
    await dispose_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

_status_codes = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
}


def _request_id(request: Request) -> str:
    # The fallback handler runs outside the request-id middleware's context
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse envelope.

    Handler table:
        RequestValidationError  → 400 Bad Request (body could not be decoded)
        NotFoundError           → 404 Not Found ("Movie not found")
        DatabaseError           → 500 Internal Server Error (driver text)
        StarletteHTTPException  → its own status (unknown route, bad method)
        MoviesAPIError (base)   → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error (generic message)
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """FastAPI could not decode the body into the expected model."""
        rid = _request_id(request)
        errors = jsonable_encoder(exc.errors())
        logger.warning("[%s] Invalid request payload: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Invalid request payload",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Storage failure; the driver's text is returned as the message."""
        rid = _request_id(request)
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "database_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Routing-level errors: unknown path, method not allowed."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": _status_codes.get(exc.status_code, "http_error"),
                "message": str(exc.detail),
                "request_id": _request_id(request),
            },
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(MoviesAPIError)
    async def handle_app_error(request: Request, exc: MoviesAPIError):
        rid = _request_id(request)
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
        """Catch-all; the stack trace is logged, never returned."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={"X-Request-ID": rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance each call, so tests can build one, override
    `get_movie_store`, and skip the MongoDB lifespan entirely.
    """
    app = FastAPI(
        title="Movies API",
        description="CRUD service for movie records stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(movies.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "movies_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# uvicorn expects `movies_api.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    run()
