"""CORS Middleware — permissive cross-origin headers on every response.

Invariants:
    - Allow-Origin/-Methods/-Headers set on every response, error responses included
    - OPTIONS on any path answers 200 with an empty body; no route handler runs
    - Unhandled exceptions are answered outside this middleware, so the
      catch-all handler stamps the same headers via cors_headers()

Design Decisions:
    - Custom middleware over Starlette's CORSMiddleware: that one only decorates
      requests carrying an Origin header and rejects preflights whose requested
      method/headers are not allowed, while clients here expect the headers
      unconditionally
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp


def cors_headers(
    allow_origin: str = "*",
    allow_methods: str = "GET, POST, PUT, DELETE, OPTIONS",
    allow_headers: str = "Content-Type",
) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": allow_methods,
        "Access-Control-Allow-Headers": allow_headers,
    }


class PermissiveCORSMiddleware(BaseHTTPMiddleware):
    """Stamp CORS headers on every response and short-circuit OPTIONS."""

    def __init__(
        self,
        app: ASGIApp,
        allow_origin: str = "*",
        allow_methods: str = "GET, POST, PUT, DELETE, OPTIONS",
        allow_headers: str = "Content-Type",
    ):
        super().__init__(app)
        self.headers = cors_headers(allow_origin, allow_methods, allow_headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers.update(self.headers)
        return response
