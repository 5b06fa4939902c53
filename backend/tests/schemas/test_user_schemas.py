"""User Schemas — body parsing rules and response timestamp normalization."""

from datetime import datetime, timezone, timedelta

import pytest

from app.core.errors import ClientInputError
from app.schemas.user import UserPayload, UserResponse, INVALID_JSON_MESSAGE


def test_from_body_reads_name_and_email():
    p = UserPayload.from_body(b'{"name": "Ada", "email": "ada@example.com"}')
    assert (p.name, p.email) == ("Ada", "ada@example.com")


def test_from_body_ignores_unknown_and_server_fields():
    p = UserPayload.from_body(
        b'{"id": 9, "created_at": "x", "role": "admin", "name": "a", "email": "b"}',
    )
    assert p.model_dump() == {"name": "a", "email": "b"}


@pytest.mark.parametrize("raw", [
    b"", b"{", b"null", b"[]", b"42",
    b'{"name": "a", "email": "b"} x',
    b'{"name": ["a"], "email": "b"}',
    b'{"name": "a", "email": true}',
])
def test_from_body_rejects_malformed_json(raw):
    with pytest.raises(ClientInputError) as exc:
        UserPayload.from_body(raw)
    assert exc.value.message == INVALID_JSON_MESSAGE


def test_from_body_checks_fields_after_parsing():
    with pytest.raises(ClientInputError) as exc:
        UserPayload.from_body(b'{"name": "a"}')
    assert exc.value.message == "Name and email are required"


def test_response_treats_naive_timestamp_as_utc():
    r = UserResponse(
        id=1, name="a", email="b", created_at=datetime(2024, 5, 1, 12, 0, 0),
    )
    assert r.created_at.tzinfo == timezone.utc
    assert r.model_dump(mode="json")["created_at"] == "2024-05-01T12:00:00Z"


def test_response_keeps_aware_timestamp_offset():
    tz = timezone(timedelta(hours=2))
    r = UserResponse(
        id=1, name="a", email="b", created_at=datetime(2024, 5, 1, 12, tzinfo=tz),
    )
    assert r.created_at.utcoffset() == timedelta(hours=2)
