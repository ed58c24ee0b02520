"""
Request logging middleware for FastAPI application.
"""

import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from fieldfeed.core.shared.logger import get_api_logger

request_logger = get_api_logger("requests")


def get_client_ip(request: Request) -> str:
    """Client address, honouring the first hop of X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of every request.

    Each request gets a correlation ID (taken from ``X-Correlation-ID`` when
    the caller sends one) that is echoed back in the response headers.
    """

    EXCLUDE_PATHS: tuple[str, ...] = ("/health", "/favicon.ico")

    def _should_log(self, path: str) -> bool:
        return not any(path.startswith(exclude) for exclude in self.EXCLUDE_PATHS)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        if not self._should_log(request.url.path):
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        log = request_logger.with_context(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
            client_ip=get_client_ip(request),
        )
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            log.error(f"{request.method} {request.url.path} failed: {e}", duration_ms=round(duration_ms, 2))
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        message = f"{request.method} {request.url.path} {response.status_code} in {duration_ms:.2f}ms"
        if response.status_code >= 500:
            log.error(message, status=response.status_code)
        elif response.status_code >= 400:
            log.warning(message, status=response.status_code)
        else:
            log.info(message, status=response.status_code)

        response.headers["X-Correlation-ID"] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response
