"""
Course response mapping utilities.

Transforms service results into Pydantic response models.

Dependencies: cognition_api.models.course
System role: Course image response transformation
"""

from typing import Any

from cognition_api.models.course import ImageDeleteResponse, ImageUploadResponse


def map_upload_to_response(result: dict[str, Any]) -> ImageUploadResponse:
    """
    Transform an upload result into ImageUploadResponse.

    Args:
        result: Dictionary with message, imageId, imageUrl

    Returns:
        ImageUploadResponse: Pydantic model for API response
    """
    return ImageUploadResponse(**result)


def map_image_deletion_to_response(result: dict[str, Any]) -> ImageDeleteResponse:
    return ImageDeleteResponse(**result)
