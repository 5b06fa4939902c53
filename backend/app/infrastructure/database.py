"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StoreError (core/errors.py)

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages
      lifecycle, dispose() on shutdown releases the pool
    - expire_on_commit=False: prevents lazy-load issues in async context
    - pool sizing only applies to pooled dialects; SQLite gets the driver default
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from app.core.errors import StoreError
from app.db.base import Base

logger = logging.getLogger(__name__)


def describe_store_error(exc: SQLAlchemyError) -> str:
    """Driver-level description of a failure, without SQLAlchemy's background link."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def to_store_error(exc: SQLAlchemyError, operation: str) -> StoreError:
    """Map a SQLAlchemy exception to the domain StoreError."""
    if isinstance(exc, IntegrityError):
        kind = "integrity"
    elif isinstance(exc, OperationalError):
        kind = "operational"
    elif isinstance(exc, DBAPIError):
        kind = "driver"
    else:
        kind = "sqlalchemy"
    detail = describe_store_error(exc)
    logger.error(
        f"DB {kind} error during {operation}: {detail}",
        extra={"operation": operation},
    )
    return StoreError(detail, operation)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise to_store_error(e, "session")
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def ping(self) -> None:
        """Round-trip to the store. Raises StoreError if unreachable."""
        async with self.session() as db:
            await db.execute(text("SELECT 1"))

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.ping()
            return True
        except StoreError as e:
            logger.error(f"DB health check failed: {e.detail}")
            return False

    async def create_tables(self) -> None:
        """Create missing tables from ORM metadata."""
        import app.models  # noqa: F401
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise to_store_error(e, "create_tables")

    async def close(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
