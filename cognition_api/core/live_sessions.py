"""
Live session rules.

Status is derived from the clock at read time; it is never stored.

Dependencies: None
System role: Pure live session helpers
"""

from datetime import datetime
from typing import Any

from cognition_api.core.timestamps import as_aware_datetime

DEFAULT_MAX_PARTICIPANTS = 100
DEFAULT_CATEGORY = "General"

# Stored on create when the admin leaves them out
SESSION_DEFAULTS: dict[str, Any] = {
    "category": DEFAULT_CATEGORY,
    "maxParticipants": DEFAULT_MAX_PARTICIPANTS,
    "participants": 0,
    "meetingLink": "",
    "recordingAvailable": False,
}


def session_status(start: Any, end: Any, now: datetime) -> str:
    """
    Classify a session against now.

    Returns:
        "live" while start <= now <= end, "upcoming" before start,
        "completed" otherwise
    """
    start_at = as_aware_datetime(start)
    end_at = as_aware_datetime(end)
    if start_at <= now <= end_at:
        return "live"
    if now < start_at:
        return "upcoming"
    return "completed"


def has_started(start: Any, now: datetime) -> bool:
    return as_aware_datetime(start) < now


def is_full(booked: int, max_participants: Any) -> bool:
    limit = max_participants if isinstance(max_participants, int) else DEFAULT_MAX_PARTICIPANTS
    return booked >= limit
