"""
Storefront Backend — Access Log Middleware
============================================

What:  One access log line per API request, e.g.

           POST /api/products -> 201 in 48.3ms (2.1 MB in) [1f3a9c2e] 10.0.0.7

Level: chosen from the response status (see _level_for).

Static file hits under /uploads and health probes are not logged; a
product page can pull a dozen images per view. Request bodies are never
logged, only the declared Content-Length of uploads.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from storefront.middleware.request_id import request_id_var

logger = logging.getLogger("storefront.access")

QUIET_PATHS = ("/health", "/uploads/")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _body_size(request: Request) -> Optional[int]:
    raw = request.headers.get("content-length")
    return int(raw) if raw and raw.isdigit() else None


def _format_size(size: Optional[int]) -> str:
    if not size:
        return ""
    if size >= 1024 * 1024:
        return f" ({size / (1024 * 1024):.1f} MB in)"
    return f" ({size / 1024:.1f} KB in)"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for everything except QUIET_PATHS."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path.startswith(QUIET_PATHS):
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        client = request.client.host if request.client else "-"
        size = _body_size(request)
        rid = request_id_var.get("")

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %d in %.1fms%s [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            _format_size(size),
            rid,
            client,
            extra={
                "request_id": rid,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "body_bytes": size,
            },
        )
        return response
