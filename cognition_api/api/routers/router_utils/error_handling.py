"""
Service error translation.

Maps the application exception hierarchy onto HTTP status codes and provides
the decorator routers wrap their handlers with.

Dependencies: fastapi, cognition_api.core.exceptions
System role: Uniform error responses across routers
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from cognition_api.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CognitionBerriesError,
    ConflictError,
    NotFoundError,
    PaymentGatewayError,
    PaymentGatewayNotConfiguredError,
    ValidationError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

INTERNAL_ERROR_MESSAGE = "Internal server error"

# First match wins, so subclasses precede their parents
_STATUS_CODES: list[tuple[type[CognitionBerriesError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PaymentGatewayNotConfiguredError, status.HTTP_501_NOT_IMPLEMENTED),
    (PaymentGatewayError, status.HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: CognitionBerriesError) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def http_exception_for(exc: CognitionBerriesError) -> HTTPException:
    """
    Build the HTTPException for an application error.

    Client errors carry the exception message; server errors are logged with
    traceback and answered with a generic message.
    """
    status_code = status_code_for(exc)
    if status_code >= 500 and status_code != status.HTTP_501_NOT_IMPLEMENTED:
        logger.error(
            "Service error",
            exc_info=exc,
            extra={"error": str(exc), "error_type": type(exc).__name__, "details": exc.details},
        )
        if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
            return HTTPException(status_code=status_code, detail=INTERNAL_ERROR_MESSAGE)
    else:
        logger.warning(
            "Request rejected",
            extra={"error": str(exc), "error_type": type(exc).__name__, "status_code": status_code},
        )
    return HTTPException(status_code=status_code, detail=exc.message)


def handle_service_errors(func: F) -> F:
    """
    Decorator translating service exceptions into HTTPExceptions.

    HTTPExceptions raised by the handler pass through untouched; anything
    outside the application hierarchy becomes a logged 500.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except CognitionBerriesError as e:
            raise http_exception_for(e) from e
        except Exception as e:
            logger.exception(
                "Unexpected failure handling request",
                extra={"handler": func.__name__, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=INTERNAL_ERROR_MESSAGE,
            ) from e

    return wrapper  # type: ignore
