"""
Logger configuration.

Every record is stamped with the request's correlation ID and the caller's
uid so a single request can be followed through the logs.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from cognition_api.observability.correlation import get_caller_uid, get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s uid=%(caller_uid)s] %(message)s"

# Chatty clients that log every round trip at INFO
QUIET_LOGGERS = ("pymongo", "motor", "httpx", "httpcore", "google", "firebase_admin")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID and caller uid to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        record.caller_uid = get_caller_uid() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once per process; calling again replaces the handler."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
