"""Async Session Factory — async DB sessions for use outside FastAPI.

Invariants:
    - expire_on_commit=False, same as DatabaseSessionManager

Design Decisions:
    - Separate from infrastructure/database.py: scripts and test fixtures need
      a raw engine + session factory without the error-mapping wrapper
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def create_engine_and_factory(
    database_url: str, **engine_kwargs,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an async engine and a session factory bound to it."""
    engine = create_async_engine(database_url, echo=False, **engine_kwargs)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
    return engine, factory
