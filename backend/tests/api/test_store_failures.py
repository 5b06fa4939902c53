"""Store Failures — every store error surfaces as 500 without leaking detail.

Invariants:
    - StoreError from the repository → 500 with a generic message by default
    - expose_store_errors=True → 500 with the raw store description
    - A real SQL failure (missing table) maps to the same 500 contract
"""

import pytest

from app.config import Settings
from app.core.errors import StoreError
from app.infrastructure.user_repository import get_user_repository
from app.db.base import Base
from app.main import app


class _BrokenRepository:
    """UserRepository whose every call fails like an unreachable store."""

    def _fail(self, operation):
        raise StoreError("dial tcp 127.0.0.1:3306: connection refused", operation)

    async def list_all(self):
        self._fail("select_all")

    async def get(self, user_id):
        self._fail("select_by_id")

    async def create(self, name, email):
        self._fail("insert")

    async def update(self, user_id, name, email):
        self._fail("update")

    async def delete(self, user_id):
        self._fail("delete")


@pytest.fixture
def broken_store(client):
    app.dependency_overrides[get_user_repository] = lambda: _BrokenRepository()
    yield
    app.dependency_overrides.pop(get_user_repository, None)


REQUESTS = [
    ("GET", "/users", None),
    ("GET", "/user/1", None),
    ("POST", "/user", {"name": "n", "email": "e@x.io"}),
    ("PUT", "/user/1", {"name": "n", "email": "e@x.io"}),
    ("DELETE", "/user/1", None),
]


@pytest.mark.parametrize("method,path,body", REQUESTS)
async def test_store_error_returns_generic_500(
    client, broken_store, method, path, body,
):
    res = await client.request(method, path, json=body)
    assert res.status_code == 500
    assert res.text == "Internal server error"
    assert "connection refused" not in res.text


@pytest.mark.parametrize("method,path,body", REQUESTS)
async def test_store_error_detail_exposed_when_enabled(
    client, broken_store, monkeypatch, method, path, body,
):
    monkeypatch.setattr(
        "app.api.error_handlers.get_settings",
        lambda: Settings(expose_store_errors=True),
    )
    res = await client.request(method, path, json=body)
    assert res.status_code == 500
    assert res.text == "dial tcp 127.0.0.1:3306: connection refused"


async def test_validation_runs_before_store_is_touched(client, broken_store):
    res = await client.get("/user/abc")
    assert res.status_code == 400
    res = await client.post("/user", json={"name": "", "email": ""})
    assert res.status_code == 400


async def test_missing_table_maps_to_500(client, test_engine):
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    res = await client.get("/users")
    assert res.status_code == 500
    assert res.text == "Internal server error"


async def test_missing_table_detail_exposed_when_enabled(
    client, test_engine, monkeypatch,
):
    monkeypatch.setattr(
        "app.api.error_handlers.get_settings",
        lambda: Settings(expose_store_errors=True),
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    res = await client.post("/user", json={"name": "n", "email": "e@x.io"})
    assert res.status_code == 500
    assert "no such table" in res.text
