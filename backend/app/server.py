"""Process entry point — runs the ASGI app under uvicorn.

Invariants:
    - host/port come from settings (HOST, PORT env vars)
    - A startup failure (port in use, store unreachable) exits non-zero
"""

import uvicorn

from app.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
