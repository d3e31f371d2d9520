"""
Material book schemas.

Books are free-form beyond their title; image holds the id of a stored
image document.

Dependencies: pydantic
System role: Material book API contracts
"""

from pydantic import BaseModel, ConfigDict, Field

# Computed on read
RESERVED_BOOK_FIELDS = frozenset({"_id", "imageData", "displayImage", "hasImage"})


class CreateBookRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1, max_length=255)
    author: str | None = None
    description: str | None = None
    image: str | None = Field(None, description="Image document id")
    book_id: str | None = Field(None, description="External book identifier")


class UpdateBookRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, min_length=1, max_length=255)
    author: str | None = None
    description: str | None = None
    image: str | None = None
