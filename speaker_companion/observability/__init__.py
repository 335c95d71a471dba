"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware.
"""

from speaker_companion.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from speaker_companion.observability.logger import configure_logging
from speaker_companion.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

__all__ = [
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
