"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test that asks for a database gets a fresh in-memory SQLite store
    - Settings never point at a real server during tests

Design Decisions:
    - SQLite in-memory through aiosqlite: fast, no external dependency;
      StaticPool so every session shares the one in-memory database
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.db.session import create_engine_and_factory  # noqa: E402
import app.models  # noqa: E402,F401


@pytest.fixture
async def engine_and_factory():
    engine, factory = create_engine_and_factory(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine, factory
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def test_engine(engine_and_factory):
    return engine_and_factory[0]


@pytest.fixture
def test_session_factory(engine_and_factory):
    return engine_and_factory[1]


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
