"""
Lesson progress API endpoints.

Routes:
- GET /progress/{userId}/{courseId} - Own progress, or any as admin
- POST /progress/update, /progress/autosave-video,
  /progress/complete-lesson, /progress/reset
- GET /user/all-progress
- GET /admin/progress/{userId}/{courseId}, POST /admin/progress/reset (admin)

Dependencies: cognition_api.application.services.progress_service
System role: Progress tracking HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import (
    get_current_user,
    get_progress_service,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.progress_service import ProgressService
from cognition_api.models.progress import (
    AdminResetProgressRequest,
    AutosaveVideoRequest,
    CompleteLessonRequest,
    ResetProgressRequest,
    UpdateProgressRequest,
)
from cognition_api.models.user import CurrentUser

router = APIRouter(tags=["progress"])


@router.get("/progress/{user_id}/{course_id}")
@handle_service_errors
async def get_progress(
    user_id: str,
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    """
    Get a user's course progress, creating an empty record on first read.

    Raises:
        HTTPException(403): Caller is neither the user nor an admin
        HTTPException(404): User is not enrolled
    """
    return await progress_service.get_progress(user.uid, user_id, course_id)


@router.post("/progress/update")
@handle_service_errors
async def update_progress(
    request: UpdateProgressRequest,
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    changes = request.model_dump(exclude_unset=True, exclude={"courseId"})
    return await progress_service.update_progress(user.uid, request.courseId, changes)


@router.post("/progress/autosave-video")
@handle_service_errors
async def autosave_video(
    request: AutosaveVideoRequest,
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    return await progress_service.autosave_video(
        user.uid, request.courseId, request.lessonId, request.position, request.duration
    )


@router.post("/progress/complete-lesson")
@handle_service_errors
async def complete_lesson(
    request: CompleteLessonRequest,
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    return await progress_service.complete_lesson(
        user.uid, request.courseId, request.lessonId, request.quizScore
    )


@router.post("/progress/reset")
@handle_service_errors
async def reset_progress(
    request: ResetProgressRequest,
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    return await progress_service.reset_progress(user.uid, request.courseId)


@router.get("/user/all-progress")
@handle_service_errors
async def all_progress(
    user: CurrentUser = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service),
) -> list[dict[str, Any]]:
    return await progress_service.all_progress(user.uid)


@router.get("/admin/progress/{user_id}/{course_id}")
@handle_service_errors
async def admin_get_progress(
    user_id: str,
    course_id: str,
    admin: CurrentUser = Depends(require_admin),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    return await progress_service.admin_get_progress(user_id, course_id)


@router.post("/admin/progress/reset")
@handle_service_errors
async def admin_reset_progress(
    request: AdminResetProgressRequest,
    admin: CurrentUser = Depends(require_admin),
    progress_service: ProgressService = Depends(get_progress_service),
) -> dict[str, Any]:
    return await progress_service.admin_reset_progress(request.userId, request.courseId)
