"""
FastAPI middleware for observability.

CorrelationMiddleware opens the tracing context for each request and echoes
X-Correlation-ID back. RequestLoggingMiddleware writes one line per request,
at WARNING for server errors.

Dependencies: fastapi, starlette, cognition_api.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cognition_api.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and timing of every request."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        method, path = request.method, request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Exception",
                extra={"method": method, "path": path, "process_time_ms": _elapsed_ms(start_time), "error_type": type(e).__name__},
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"{method} {path} - {response.status_code}",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(start_time),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Scope a correlation ID to the request and return it in the response."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
