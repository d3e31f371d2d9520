"""
Course API endpoints.

Routes:
- GET /courses - List all courses with resolved images
- GET /courses/{id} - Get single course
- POST /courses - Create new course (admin)
- PUT /courses/{id} - Update course (admin)
- DELETE /courses/{id} - Delete course and its image (admin)
- POST /courses/{id}/ and /courses/{id}/image - Upload course image (admin)
- DELETE /courses/{id}/image - Remove course image (admin)

Dependencies: cognition_api.application.services, cognition_api.models
System role: Course management HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import (
    get_course_service,
    get_image_service,
    require_admin,
)
from cognition_api.application.services.course_service import CourseService
from cognition_api.application.services.image_service import ImageService
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.course import (
    CreateCourseRequest,
    ImageDeleteResponse,
    ImageUploadRequest,
    ImageUploadResponse,
    UpdateCourseRequest,
)
from cognition_api.models.user import CurrentUser

from .course_error_handling import handle_course_errors
from .course_responses import map_image_deletion_to_response, map_upload_to_response
from .course_validators import validate_course_creation, validate_course_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("")
@handle_course_errors
async def list_courses(
    course_service: CourseService = Depends(get_course_service),
) -> list[dict[str, Any]]:
    """
    List all courses with their image documents embedded.

    Returns:
        list[dict]: Courses, each with imageData when the reference resolves

    Raises:
        HTTPException(500): Retrieval failed
    """
    courses = await course_service.list_courses()
    logger.info("Courses listed", extra={"count": len(courses)})
    return courses


@router.get("/{course_id}")
@handle_course_errors
async def get_course(
    course_id: str,
    course_service: CourseService = Depends(get_course_service),
) -> dict[str, Any]:
    """
    Get a course by its external course_id or internal _id.

    Raises:
        HTTPException(404): Course not found
    """
    return await course_service.get_course(course_id)


@router.post("", status_code=201)
@handle_course_errors
async def create_course(
    request: CreateCourseRequest,
    admin: CurrentUser = Depends(require_admin),
    course_service: CourseService = Depends(get_course_service),
) -> dict[str, Any]:
    """
    Create new course.

    Args:
        request: Course fields; unknown fields are stored as sent
        admin: Authenticated admin
        course_service: Injected CourseService

    Returns:
        dict: Stored course document

    Raises:
        HTTPException(400): Invalid request
    """
    fields = sent_fields(request)
    validate_course_creation(fields)
    return await course_service.create_course(fields, created_by=admin.uid)


@router.put("/{course_id}")
@handle_course_errors
async def update_course(
    course_id: str,
    request: UpdateCourseRequest,
    admin: CurrentUser = Depends(require_admin),
    course_service: CourseService = Depends(get_course_service),
) -> dict[str, Any]:
    """
    Partially update a course.

    Raises:
        HTTPException(400): No fields, blank title or image fields sent
        HTTPException(404): Course not found
    """
    fields = sent_fields(request)
    validate_course_update(fields)
    return await course_service.update_course(course_id, fields, updated_by=admin.uid)


@router.delete("/{course_id}", response_model=MessageResponse)
@handle_course_errors
async def delete_course(
    course_id: str,
    admin: CurrentUser = Depends(require_admin),
    course_service: CourseService = Depends(get_course_service),
) -> MessageResponse:
    await course_service.delete_course(course_id)
    logger.info("Course deleted", extra={"course_id": course_id, "uid": admin.uid})
    return MessageResponse(message="Course deleted")


@router.post("/{course_id}/", response_model=ImageUploadResponse)
@router.post("/{course_id}/image", response_model=ImageUploadResponse)
@handle_course_errors
async def upload_course_image(
    course_id: str,
    request: ImageUploadRequest,
    admin: CurrentUser = Depends(require_admin),
    image_service: ImageService = Depends(get_image_service),
) -> ImageUploadResponse:
    """
    Upload a base64 image and make it the course's current image.

    The previous image document, if any, is removed once the course points
    at the new one.

    Args:
        course_id: External course_id or _id
        request: image data URL and optional filename
        admin: Authenticated admin
        image_service: Injected ImageService

    Returns:
        ImageUploadResponse: message, imageId, imageUrl

    Raises:
        HTTPException(400): Not a base64 image data URL, or larger than 5MB
        HTTPException(404): Course not found
    """
    result = await image_service.upload_course_image(
        course_id, request.image, request.filename, uploaded_by=admin.uid
    )
    return map_upload_to_response(result)


@router.delete("/{course_id}/image", response_model=ImageDeleteResponse)
@handle_course_errors
async def delete_course_image(
    course_id: str,
    admin: CurrentUser = Depends(require_admin),
    image_service: ImageService = Depends(get_image_service),
) -> ImageDeleteResponse:
    """
    Remove the course's image reference and its image document.

    Raises:
        HTTPException(400): Course has no image, or it changed during the request
        HTTPException(404): Course not found
    """
    result = await image_service.delete_course_image(course_id, updated_by=admin.uid)
    return map_image_deletion_to_response(result)
