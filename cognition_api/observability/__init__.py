"""
Observability module.

Structured logging stamped with correlation ID and caller uid, plus the
request middleware that opens that context.
"""

from cognition_api.observability.correlation import (
    get_caller_uid,
    get_correlation_id,
    set_caller_uid,
    set_correlation_id,
)
from cognition_api.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "set_correlation_id",
    "get_caller_uid",
    "set_caller_uid",
]
