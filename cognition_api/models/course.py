"""
Course domain models and schemas.

Request/response schemas for course and course image operations. Course
documents are free-form beyond title, description and price, so the request
schemas accept extra fields.

Dependencies: pydantic
System role: Course API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Managed by the image endpoints only
RESERVED_COURSE_FIELDS = frozenset({"_id", "image", "imageType", "imageUrl", "imageData"})


class CreateCourseRequest(BaseModel):
    """Request schema for creating a new course."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1, max_length=255, description="Course title")
    description: str | None = Field(None, description="Course description")
    price: float | None = Field(None, ge=0, description="Course price in major units")
    course_id: str | None = Field(None, description="External course identifier")


class UpdateCourseRequest(BaseModel):
    """Request schema for updating a course."""

    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, min_length=1, max_length=255, description="Course title")
    description: str | None = Field(None, description="Course description")
    price: float | None = Field(None, ge=0, description="Course price in major units")


class ImageUploadRequest(BaseModel):
    """Course image upload body: a base64 data URL and an optional filename."""

    image: str | None = Field(None, description="data:image/<type>;base64,<payload>")
    filename: str | None = Field(None, description="Original file name")


class ImageUploadResponse(BaseModel):
    message: str
    imageId: str
    imageUrl: str


class ImageDeleteResponse(BaseModel):
    message: str
    imageId: str


class ImageResponse(BaseModel):
    """Stored image returned by the image resolver."""

    id: str
    data: str | None = None
    mimeType: str | None = None
    filename: str | None = None
    uploadedAt: datetime | None = None
