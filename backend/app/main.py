"""Users API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → plain-text responses
    - CORS headers configured from settings (not hardcoded)
    - Database pool created on startup and disposed on shutdown via lifespan
    - Startup fails if the store cannot be reached

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests and the uvicorn runner build the same app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.cors import PermissiveCORSMiddleware
from app.api.error_handlers import register_error_handlers
from app.api.routes import health, users
from app.config import get_settings
from app.infrastructure.database import init_db, close_db
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await manager.ping()
        if settings.database_create_tables:
            await manager.create_tables()
    except Exception:
        await close_db()
        raise
    logger.info("Successfully connected to database")
    logger.info("Users API started")
    yield
    logger.info("Users API shutting down")
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Users API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        PermissiveCORSMiddleware,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
