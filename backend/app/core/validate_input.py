"""Input Validation — pure checks on path ids and user payload fields.

Invariants:
    - parse_user_id accepts what a base-10 integer parser accepts: an optional
      sign followed by ASCII digits, nothing else (no whitespace, no underscores)
    - Accepted ids fit a signed 64-bit integer; larger magnitudes are malformed
    - Presence is checked before format
    - Name and email are required together; an empty string counts as missing
"""

import re

from app.core.domain_types import UserId
from app.core.errors import ClientInputError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_MIN_ID = -2**63
_MAX_ID = 2**63 - 1

MISSING_ID_MESSAGE = "User ID is required"
INVALID_ID_MESSAGE = "Invalid user ID format"
MISSING_FIELDS_MESSAGE = "Name and email are required"


def parse_user_id(raw: str | None) -> UserId:
    """Validate and convert a path id. Raises ClientInputError."""
    if not raw:
        raise ClientInputError(MISSING_ID_MESSAGE)
    if not _INTEGER_RE.fullmatch(raw):
        raise ClientInputError(INVALID_ID_MESSAGE)
    value = int(raw)
    if not _MIN_ID <= value <= _MAX_ID:
        raise ClientInputError(INVALID_ID_MESSAGE)
    return UserId(value)


def check_required_fields(name: str | None, email: str | None) -> tuple[str, str]:
    """Both fields must be non-empty strings."""
    if not name or not email:
        raise ClientInputError(MISSING_FIELDS_MESSAGE)
    return name, email
