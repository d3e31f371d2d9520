"""
Course error handling utilities.

Decorator for consistent error handling across course and course image
endpoints. Adds the course identifier to every log line before delegating
the status mapping to the shared translation.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from cognition_api.api.routers.router_utils.error_handling import (
    INTERNAL_ERROR_MESSAGE,
    http_exception_for,
)
from cognition_api.core.exceptions import (
    CognitionBerriesError,
    CourseNotFoundError,
    ImageTooLargeError,
    InvalidImageError,
)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_course_errors(func: F) -> F:
    """
    Decorator to handle course-related errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (course_id)
    - Mapping application exceptions to HTTP status codes
    - Letting handler-raised HTTPExceptions through unchanged
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        course_id = kwargs.get("course_id")
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except CourseNotFoundError as e:
            logger.warning("Course not found", extra={"course_id": course_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e

        except (InvalidImageError, ImageTooLargeError) as e:
            logger.warning(
                "Rejected course image",
                extra={"course_id": course_id, "error": str(e), "details": e.details},
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e

        except CognitionBerriesError as e:
            raise http_exception_for(e) from e

        except Exception as e:
            logger.exception(
                "Unexpected failure in course operation",
                extra={"course_id": course_id, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=INTERNAL_ERROR_MESSAGE,
            ) from e

    return wrapper  # type: ignore
