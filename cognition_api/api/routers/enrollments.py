"""
Enrollment API endpoints.

Routes:
- GET /user/enrollments - Caller's enrollments with their courses
- POST|DELETE|GET /enroll/{courseId} - Enroll, unenroll, status

Dependencies: cognition_api.application.services.enrollment_service
System role: Enrollment HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import get_current_user, get_enrollment_service
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.enrollment_service import EnrollmentService
from cognition_api.models.common import MessageResponse
from cognition_api.models.user import CurrentUser

router = APIRouter(tags=["enrollments"])


@router.get("/user/enrollments")
@handle_service_errors
async def list_enrollments(
    user: CurrentUser = Depends(get_current_user),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> list[dict[str, Any]]:
    return await enrollment_service.list_enrollments(user.uid)


@router.post("/enroll/{course_id}", status_code=201)
@handle_service_errors
async def enroll(
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> dict[str, Any]:
    """
    Enroll the caller in a course.

    Raises:
        HTTPException(400): Already enrolled
        HTTPException(404): Course not found
    """
    return await enrollment_service.enroll(course_id, user.model_dump())


@router.delete("/enroll/{course_id}", response_model=MessageResponse)
@handle_service_errors
async def unenroll(
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> MessageResponse:
    await enrollment_service.unenroll(course_id, user.uid)
    return MessageResponse(message="Unenrolled successfully")


@router.get("/enroll/{course_id}")
@handle_service_errors
async def enrollment_status(
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    enrollment_service: EnrollmentService = Depends(get_enrollment_service),
) -> dict[str, Any]:
    return await enrollment_service.enrollment_status(course_id, user.uid)
