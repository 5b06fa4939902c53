"""Error Handlers — global exception handlers for the Users API.

Invariants:
    - UsersApiError → plain-text body with the error's http_status
    - StoreError body is generic unless expose_store_errors is enabled
    - HTTPException (unknown route, wrong method) keeps its status, plain text
    - Exception (catch-all) → 500 with CORS headers, never leaks internal details

Design Decisions:
    - Plain-text error bodies: clients match on status code and a short message,
      not on a JSON envelope
    - No RequestValidationError handler: routes take the path id as str and
      parse the raw body themselves, so framework validation never fails
    - Registered from main.py through register_error_handlers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.cors import cors_headers
from app.config import get_settings
from app.core.errors import (
    UsersApiError, StoreError, ErrorSeverity, GENERIC_STORE_MESSAGE,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_users_api_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_users_api_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(UsersApiError)
    async def users_api_error_handler(request: Request, exc: UsersApiError):
        extra = {
            **exc.to_log_extra(),
            "path": request.url.path,
            "method": request.method,
        }
        if exc.severity is ErrorSeverity.CRITICAL:
            logger.error(f"{exc.code}: {_log_message(exc)}", extra=extra)
        else:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        return PlainTextResponse(
            _client_message(exc), status_code=exc.http_status,
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (404 unknown path, 405 wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler.

    Starlette runs this in ServerErrorMiddleware, outside the CORS
    middleware, so the response carries the CORS headers itself.
    """

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        settings = get_settings()
        return PlainTextResponse(
            GENERIC_STORE_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers=cors_headers(
                settings.cors_allow_origin,
                settings.cors_allow_methods,
                settings.cors_allow_headers,
            ),
        )


def _log_message(exc: UsersApiError) -> str:
    if isinstance(exc, StoreError):
        return f"{exc.operation} failed: {exc.detail}"
    return exc.message


def _client_message(exc: UsersApiError) -> str:
    if isinstance(exc, StoreError) and get_settings().expose_store_errors:
        return exc.detail
    return exc.message
