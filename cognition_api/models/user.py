"""
User domain models and schemas.

Dependencies: pydantic
System role: User API contracts
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

UserRole = Literal["student", "admin"]

# Not editable through profile updates
PROTECTED_PROFILE_FIELDS = frozenset({"_id", "uid", "email", "role", "createdAt"})


class CurrentUser(BaseModel):
    """Identity of the authenticated caller."""

    uid: str
    email: str | None = None
    name: str = ""
    phone: str = ""


class RegisterUserRequest(BaseModel):
    """Public sign-up payload."""

    uid: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    name: str = ""
    role: UserRole | None = None


class UpdateProfileRequest(BaseModel):
    """Self-service profile update; unknown fields are stored as given."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    phone: str | None = None
    avatar: str | None = None


class AdminUpdateUserRequest(BaseModel):
    """Admin user update."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    role: UserRole | None = None


class AvatarUploadResponse(BaseModel):
    imageUrl: str
