"""
Forum schemas.

Dependencies: pydantic
System role: Forum API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class CreatePostRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdatePostRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    category: str | None = None
    tags: list[str] | None = None


class CreateReplyRequest(BaseModel):
    """A reply to a post, optionally nested under another reply."""

    model_config = ConfigDict(extra="allow")

    content: str = Field(..., min_length=1)
    postId: str | None = None
    parentReplyId: str | None = None
    userName: str | None = None


class UpdateReplyRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    content: str | None = Field(None, min_length=1)
