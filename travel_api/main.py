"""
Travel API — FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, datastore wiring
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (travel_api.main:app) and by the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS (open)     │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET /api/destinations   GET /api/hotels/{id}       │
    │  POST /api/contact       GET /health  GET /api/test-db
    │                                                     │
    │  app.state.datastore → injected via get_datastore   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Ping the datastore once; log the outcome and keep serving either way
    Shutdown:
    1. Dispose the datastore pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from travel_api import __version__
from travel_api.config import Settings, settings as default_settings
from travel_api.database import Datastore
from travel_api.exceptions import DatabaseError, TravelApiError
from travel_api.middleware.logging import RequestLoggingMiddleware
from travel_api.middleware.request_id import RequestIDMiddleware, request_id_var
from travel_api.routes import health, travel

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
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

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def check_datastore(datastore: Datastore) -> bool:
    """
    Acquire and release one pooled connection to surface misconfiguration early.

    A failure is logged, not raised: the server keeps accepting traffic and
    /api/test-db reports the problem to whoever asks.
    """
    try:
        await datastore.ping()
    except Exception as e:
        logger.error("Database connection error: %s", e)
        return False
    logger.info("Database connected successfully")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Travel API starting up...")

    await check_datastore(app.state.datastore)

    logger.info("Server running on port %d", app_settings.port)
    logger.info("Environment: %s", app_settings.environment)

    yield

    logger.info("Travel API shutting down...")
    await app.state.datastore.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

    Handler hierarchy:
        DatabaseError           → 500 {"error": <driver message>}
        TravelApiError (base)   → 500 {"error": <message>}
        Exception (fallback)    → 500 {"error": "Internal server error"}
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        if request.app.state.settings.expose_errors:
            message = exc.message
        else:
            message = "A database error occurred. Please try again later."
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(TravelApiError)
    async def handle_app_error(request: Request, exc: TravelApiError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    datastore: Optional[Datastore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:  Configuration; defaults to the process-wide settings.
        datastore: Pre-built datastore (tests inject a SQLite one); built
                   from settings when omitted.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Travel API",
        description="Destinations, hotels and contact messages for the travel booking site.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.datastore = datastore or Datastore.from_settings(settings)

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(travel.router)
    app.include_router(health.router)

    return app


app = create_app()
