"""
Live session schemas.

Dependencies: pydantic
System role: Live session API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# participants only moves with bookings
RESERVED_SESSION_FIELDS = frozenset({"_id", "participants"})


class CreateLiveSessionRequest(BaseModel):
    """An admin-scheduled session. Optional fields left out take their defaults."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    instructor: str = Field(..., min_length=1)
    startTime: datetime
    endTime: datetime
    category: str | None = None
    maxParticipants: int | None = Field(None, ge=1)
    meetingLink: str | None = None
    recordingAvailable: bool | None = None


class UpdateLiveSessionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str | None = Field(None, min_length=1)
    description: str | None = None
    instructor: str | None = None
    startTime: datetime | None = None
    endTime: datetime | None = None
    category: str | None = None
    maxParticipants: int | None = Field(None, ge=1)
    meetingLink: str | None = None
    recordingAvailable: bool | None = None
