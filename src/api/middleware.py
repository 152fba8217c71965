"""
Custom middleware for the API.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.config import CORRELATION_ID_HEADER, SLOW_REQUEST_SECONDS
from src.utils.context import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests with timing.

    Logs method, path, status code and duration. Request bodies (review
    text) are never logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        response = await call_next(request)

        duration_seconds = time.time() - start_time
        duration_ms = duration_seconds * 1000
        is_slow = duration_seconds > SLOW_REQUEST_SECONDS

        log_level = logging.WARNING if is_slow else logging.INFO
        logger.log(
            log_level,
            f"Request completed: {request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)",
            extra={
                "event": "request_completed",
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else "unknown",
                "is_slow_request": is_slow,
                "is_error": response.status_code >= 400,
            },
        )

        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.0f}"
        return response


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware for managing correlation IDs.

    Reuses the caller's X-Correlation-ID or generates one, keeps it in
    context for every log line of the request, and echoes it back.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            correlation_id = request.headers.get(CORRELATION_ID_HEADER) or str(uuid.uuid4())
            set_correlation_id(correlation_id)
            request.state.correlation_id = correlation_id

            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response

        finally:
            clear_correlation_id()
