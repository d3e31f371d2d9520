"""
Exception hierarchy for the Cognition Berries application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.
The HTTP layer maps each family to a status code; nothing here knows about HTTP.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CognitionBerriesError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the client-facing message."""
        return self.message


class ValidationError(CognitionBerriesError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidObjectIdError(ValidationError):
    """Raised when a path parameter is not a well-formed ObjectId."""


class InvalidImageError(ValidationError):
    """Raised when an uploaded image is not a base64 image data URL."""


class ImageTooLargeError(ValidationError):
    """Raised when an uploaded image exceeds the size limit."""


class EmptyCartError(ValidationError):
    """Raised when checking out with no items in the cart."""


class InvalidEmailDomainError(ValidationError):
    """Raised when an email domain has no mail exchanger."""


class ConflictError(CognitionBerriesError):
    """Raised when a resource already exists."""


class AuthenticationError(CognitionBerriesError):
    """Raised when a caller cannot be authenticated."""


class AuthorizationError(CognitionBerriesError):
    """Raised when an authenticated caller lacks permission."""


class NotFoundError(CognitionBerriesError):
    """Raised when a requested resource does not exist."""


class CourseNotFoundError(NotFoundError):
    """Raised when a course cannot be found by course_id or _id."""

    def __init__(self, course_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["course_id"] = course_id
        super().__init__("Course not found", details)


class ImageNotFoundError(NotFoundError):
    """Raised when an image document cannot be found."""

    def __init__(self, image_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["image_id"] = image_id
        super().__init__("Image not found", details)


class UserNotFoundError(NotFoundError):
    """Raised when a user document cannot be found."""

    def __init__(self, message: str = "User not found", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class EnrollmentNotFoundError(NotFoundError):
    """Raised when a user is not enrolled in a course."""

    def __init__(self, message: str = "Enrollment not found", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class BookNotFoundError(NotFoundError):
    def __init__(self, book_id: str) -> None:
        super().__init__("Book not found", {"book_id": book_id})


class LiveSessionNotFoundError(NotFoundError):
    def __init__(self, session_id: str) -> None:
        super().__init__("Session not found", {"session_id": session_id})


class BookingNotFoundError(NotFoundError):
    def __init__(self, session_id: str) -> None:
        super().__init__("Booking not found", {"session_id": session_id})


class PaymentGatewayError(CognitionBerriesError):
    """Raised when the payment gateway rejects or fails a request."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize payment gateway error.

        Args:
            message: Error message
            operation: Gateway operation that failed (initialize, verify)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class PaymentGatewayNotConfiguredError(PaymentGatewayError):
    """Raised when no Paystack secret key is configured."""

    def __init__(self) -> None:
        super().__init__("Paystack not configured")
