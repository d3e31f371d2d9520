"""
Review schemas.

Dependencies: pydantic
System role: Review API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class CreateReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    title: str = Field(..., min_length=1)
    review: str = Field(..., min_length=1)
    studentName: str | None = None


class UpdateReviewRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    rating: int | None = Field(None, ge=1, le=5)
    title: str | None = Field(None, min_length=1)
    review: str | None = Field(None, min_length=1)
