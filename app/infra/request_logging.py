"""Middleware logging one line per API request."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.infra.logging_config import get_logger

logger = get_logger("http")

API_PREFIX = "/api"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for requests under /api."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                "%s %s %s in %dms",
                request.method,
                path,
                response.status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        return response
