"""
Course image reference rules.

Parsing and validation of base64 image data URLs, the size estimate used to
enforce the upload limit, and normalisation of stored image data back into
full data URLs. Stored images predate a consistent format, so the read side
accepts bare base64 payloads as well as complete data URLs.

Dependencies: re
System role: Image payload validation for the course image service
"""

import re
from dataclasses import dataclass
from pathlib import PurePath

from cognition_api.core.exceptions import ImageTooLargeError, InvalidImageError

MAX_IMAGE_BYTES = 5 * 1024 * 1024
DATA_URL_PREFIX = "data:image/"
IMAGE_URL_TEMPLATE = "/api/images/{image_id}"

_DATA_URL_PATTERN = re.compile(r"data:image/([a-zA-Z0-9.+-]+);base64,(.+)", re.DOTALL)

_EXTENSION_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


@dataclass(frozen=True)
class ParsedImage:
    """A validated base64 image data URL."""

    subtype: str
    payload: str
    data_url: str

    @property
    def mime_type(self) -> str:
        return f"image/{self.subtype}"

    @property
    def estimated_size(self) -> float:
        return estimate_decoded_size(self.payload)


def estimate_decoded_size(payload: str) -> float:
    """
    Estimate decoded byte size of a base64 payload.

    Over-counts by up to two bytes because padding is not subtracted.
    """
    return len(payload) * 3 / 4


def parse_image_data_url(value: str | None, max_bytes: int = MAX_IMAGE_BYTES) -> ParsedImage:
    """
    Validate an uploaded image data URL.

    Args:
        value: Candidate "data:image/<subtype>;base64,<payload>" string
        max_bytes: Largest accepted decoded size

    Returns:
        ParsedImage: subtype, payload and the original data URL

    Raises:
        InvalidImageError: If the value is not a base64 image data URL
        ImageTooLargeError: If the estimated decoded size exceeds max_bytes
    """
    if not value or not value.startswith(DATA_URL_PREFIX):
        raise InvalidImageError("Invalid image format", field="image")

    match = _DATA_URL_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidImageError(
            "Invalid image format: expected data:image/<type>;base64,<payload>",
            field="image",
        )

    parsed = ParsedImage(subtype=match.group(1), payload=match.group(2), data_url=value)
    if parsed.estimated_size > max_bytes:
        raise ImageTooLargeError(
            f"Image too large. Maximum {max_bytes // (1024 * 1024)}MB",
            field="image",
            details={"estimated_bytes": int(parsed.estimated_size)},
        )
    return parsed


def to_data_url(data: str | None, mime_type: str | None) -> str | None:
    """
    Normalise stored image data to a full data URL.

    Complete data URLs pass through; bare base64 is prefixed when the MIME
    type is known; anything else is returned unchanged.
    """
    if data and data.startswith(DATA_URL_PREFIX):
        return data
    if data and mime_type:
        return f"data:{mime_type};base64,{data}"
    return data


def image_url_for(image_id: str) -> str:
    """Public URL path for an image document."""
    return IMAGE_URL_TEMPLATE.format(image_id=image_id)


def mime_type_for_path(path: str) -> str:
    """Guess an image MIME type from a legacy file path, defaulting to JPEG."""
    return _EXTENSION_MIME_TYPES.get(PurePath(path).suffix.lower(), "image/jpeg")
