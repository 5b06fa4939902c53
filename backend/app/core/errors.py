"""Error Hierarchy — typed, categorized exceptions for all Users API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; store errors (500) are critical
    - message is what the client sees; StoreError keeps the raw driver text in detail

Design Decisions:
    - Single hierarchy with UsersApiError base: one FastAPI handler catches all
    - StoreError carries the operation name so logs say which statement failed
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    user_id: int | None = None


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "user_id": self.context.user_id,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ClientInputError(UsersApiError):
    """Path id or request body failed validation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class NotFoundError(UsersApiError):
    """Referenced user row does not exist."""
    def __init__(self, user_id: int | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "User not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

GENERIC_STORE_MESSAGE = "Internal server error"


class StoreError(UsersApiError):
    """Database operation failed.

    ``message`` is the generic client-facing text; ``detail`` holds the
    driver's description, returned to clients only when explicitly enabled.
    """
    def __init__(self, detail: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            GENERIC_STORE_MESSAGE, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail
        self.operation = operation

    def to_log_extra(self) -> dict:
        extra = super().to_log_extra()
        extra["operation"] = self.operation
        return extra
