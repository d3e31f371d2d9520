"""
Router utility functions.

Error translation shared by every router.
"""

from cognition_api.api.routers.router_utils.error_handling import (
    handle_service_errors,
    http_exception_for,
    status_code_for,
)

__all__ = [
    "handle_service_errors",
    "http_exception_for",
    "status_code_for",
]
