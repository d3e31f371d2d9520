"""
Common response models.

Error and message schemas shared by every router.

Dependencies: pydantic
System role: Common API response structures
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(description="Error message")
    details: list | dict | None = Field(default=None, description="Additional error context")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


def sent_fields(request: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent, extras included."""
    fields = request.model_dump(exclude_unset=True)
    fields.update(request.model_extra or {})
    return fields
