"""
ObjectId helpers.

Route parameters arrive as strings that may be an ObjectId hex string or an
external identifier such as course_id. These helpers build the lookup
filters used across the CRUD layer.

Dependencies: bson
System role: Identifier parsing for MongoDB queries
"""

from typing import Any

from bson import ObjectId

from cognition_api.core.exceptions import InvalidObjectIdError


def to_object_id(value: Any) -> ObjectId | None:
    """Return an ObjectId for a valid value, None otherwise."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def require_object_id(value: Any, message: str = "Invalid ID format") -> ObjectId:
    """
    Parse a value that must be an ObjectId.

    Raises:
        InvalidObjectIdError: If the value is not a valid ObjectId
    """
    oid = to_object_id(value)
    if oid is None:
        raise InvalidObjectIdError(message, details={"value": str(value)})
    return oid


def id_or_external_filter(value: str, external_field: str) -> dict[str, Any]:
    """
    Match a document by external identifier or by _id.

    The _id branch is only added when the value is a valid ObjectId.
    """
    clauses: list[dict[str, Any]] = [{external_field: value}]
    oid = to_object_id(value)
    if oid is not None:
        clauses.append({"_id": oid})
    return {"$or": clauses}
