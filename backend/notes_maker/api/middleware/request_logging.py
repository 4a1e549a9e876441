from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from notes_maker.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request
    from starlette.types import ASGIApp

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its outcome and add basic hardening headers."""

    def __init__(self, app: ASGIApp, slow_request_seconds: float = 30.0):
        super().__init__(app)
        self._slow_request_seconds = slow_request_seconds

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"

        context = {
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
            "duration_ms": round(elapsed * 1000, 1),
            "ip": client_ip,
        }
        if elapsed >= self._slow_request_seconds:
            logger.warning("Slow request %s %s", request.method, request.url.path, extra=context)
        elif response.status_code >= 500:
            logger.error("Request failed %s %s", request.method, request.url.path, extra=context)
        else:
            logger.info("%s %s -> %d", request.method, request.url.path, response.status_code, extra=context)

        return response
