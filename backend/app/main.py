"""
Notas Backend - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes logging setup, middleware registration, route mounting,
       error mapping and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn (`uvicorn app.main:app` or the `notas` script).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌─────────────────────┐ ┌───────────────────┐      │
    │  │ Access log + req ID │→│  Access Policy    │      │
    │  └─────────────────────┘ └───────────────────┘      │
    │                                                     │
    │  Routes:                                            │
    │  GET /  GET|POST /adicionar_nota  GET /apagar_notas │
    │  GET /ler                                           │
    │                                                     │
    │  Exception Handlers:                                │
    │  PolicyRejection→403 │ DatabaseError→500 │ *→500    │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the Notas table if absent
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app import __version__
from app.config import settings
from app.database import create_tables, dispose_engine
from app.exceptions import DatabaseError, NotasError, PolicyRejection
from app.middleware.access_policy import AccessPolicyMiddleware
from app.middleware.logging import AccessLogMiddleware, request_id_var
from app.routes import notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema on startup, release connections on shutdown."""
    setup_logging()
    logger.info("Notas starting up...")

    await create_tables()
    logger.info("Banco de dados sincronizado (%s)", settings.database_url)
    logger.info(
        "Opening hours %02dh-%02dh, note limit %d",
        settings.opening_hour,
        settings.closing_hour,
        settings.note_limit,
    )
    logger.info("Servidor rodando em http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Notas shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to plain-text responses.

    Handler hierarchy:
        PolicyRejection   → 403 with the fixed rejection text
        DatabaseError     → 500 with the operation's fixed text
        NotasError (base) → 500
        Exception         → 500 generic text, traceback logged

    Driver errors and stack traces never reach the response body.
    """

    @app.exception_handler(PolicyRejection)
    async def handle_policy_rejection(request: Request, exc: PolicyRejection):
        rid = request_id_var.get("")
        logger.info("[%s] Policy rejection (%s): %s", rid, exc.reason, exc.message)
        request.state.rejection = exc.reason
        return PlainTextResponse(exc.message, status_code=403)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(NotasError)
    async def handle_notas_error(request: Request, exc: NotasError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(exc.message, status_code=500)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse("Erro interno do servidor", status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition, so the access policy
    is added first to run last, right before the route handler.
    """
    app = FastAPI(
        title="Notas",
        description="Minimal note-taking pages with a note cap and opening hours.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(AccessPolicyMiddleware)
    app.add_middleware(AccessLogMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
