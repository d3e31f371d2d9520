"""
Document serialization.

Converts BSON-specific values into JSON-friendly ones before documents leave
the service layer.

Dependencies: bson
System role: Boundary between MongoDB documents and API responses
"""

from typing import Any

from bson import ObjectId


def serialize_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_value(item) for item in value]
    return value


def serialize_document(document: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of the document with every ObjectId turned into a string."""
    if document is None:
        return None
    return serialize_value(document)


def serialize_documents(documents: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [serialize_value(document) for document in documents]
