"""User Schemas — request payload and response shape for the user endpoints.

Invariants:
    - UserPayload ignores client-supplied id and created_at
    - name/email must be strings or null; any other JSON type is malformed input
    - UserResponse.created_at is always timezone-aware (naive store values are UTC)

Design Decisions:
    - Raw body parsed here instead of as a FastAPI body parameter: malformed
      JSON must produce the plain-text "Invalid JSON format" 400, not the
      framework's validation envelope
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from app.core.errors import ClientInputError
from app.core.validate_input import check_required_fields

INVALID_JSON_MESSAGE = "Invalid JSON format"


class UserPayload(BaseModel):
    """Create/update body. Only name and email are read."""
    model_config = ConfigDict(extra="ignore", strict=True)

    name: str | None = None
    email: str | None = None

    @classmethod
    def from_body(cls, body: bytes) -> "UserPayload":
        """Parse and validate a raw request body. Raises ClientInputError."""
        try:
            payload = cls.model_validate_json(body)
        except ValidationError:
            raise ClientInputError(INVALID_JSON_MESSAGE)
        check_required_fields(payload.name, payload.email)
        return payload


class UserResponse(BaseModel):
    """Public user representation."""
    id: int
    name: str
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
