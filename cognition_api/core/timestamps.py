"""
Timestamp normalisation.

Documents written by different clients store createdAt either as a BSON
date or as an ISO-8601 string. Sorting needs one comparable form.

Dependencies: None
System role: Shared ordering helper
"""

from datetime import datetime, timezone
from typing import Any

EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware_datetime(value: Any) -> datetime:
    """
    Coerce a stored timestamp to an aware datetime.

    Naive values are taken as UTC. Missing or unparseable values map to the
    earliest representable time so they sort first.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return EPOCH
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return EPOCH
