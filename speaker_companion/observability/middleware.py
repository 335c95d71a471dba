"""
HTTP middleware for request tracing.

CorrelationMiddleware binds a correlation ID to each request (taken from the
caller or freshly generated) and echoes it back. RequestLoggingMiddleware
writes one access line per request; status polls are demoted to DEBUG since
clients issue them every few seconds.

Dependencies: starlette, speaker_companion.observability.correlation
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from speaker_companion.observability.correlation import (
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
POLLING_SUFFIX = "/status"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per request, with latency."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        context = {"method": request.method, "path": request.url.path}

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{route} - unhandled {type(e).__name__}",
                extra={**context, "process_time_ms": _elapsed_ms(started)},
            )
            raise

        level = logging.DEBUG if request.url.path.endswith(POLLING_SUFFIX) else logging.INFO
        logger.log(
            level,
            f"{route} - {response.status_code}",
            extra={
                **context,
                "status_code": response.status_code,
                "process_time_ms": _elapsed_ms(started),
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind and echo the request correlation ID."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
