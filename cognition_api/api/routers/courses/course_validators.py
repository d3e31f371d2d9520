"""
Course validation utilities.

Business logic validation not covered by Pydantic models.

Dependencies: cognition_api.models.course
System role: Course business logic validation
"""

from typing import Any

from cognition_api.core.exceptions import ValidationError
from cognition_api.models.course import RESERVED_COURSE_FIELDS


def validate_course_creation(fields: dict[str, Any]) -> None:
    """
    Validate course creation fields with business rules.

    Raises:
        ValidationError: If business validation fails
    """
    title = fields.get("title")
    if not title or not title.strip():
        raise ValidationError("Course title cannot be empty or whitespace-only", field="title")

    _reject_reserved(fields)


def validate_course_update(fields: dict[str, Any]) -> None:
    """
    Validate course update fields with business rules.

    Raises:
        ValidationError: If business validation fails
    """
    # At least one field should be provided for update
    if not fields:
        raise ValidationError("At least one field must be provided for update")

    title = fields.get("title")
    if "title" in fields and (title is None or not title.strip()):
        raise ValidationError("Course title cannot be empty or whitespace-only", field="title")

    _reject_reserved(fields)


def _reject_reserved(fields: dict[str, Any]) -> None:
    reserved = sorted(RESERVED_COURSE_FIELDS.intersection(fields))
    if reserved:
        raise ValidationError(
            f"Field(s) {', '.join(reserved)} cannot be set here; use the course image endpoints",
            field=reserved[0],
        )
