"""
Course review API endpoints.

Reviews are embedded in one document per course.

Routes:
- GET /reviews - All reviews, flattened
- GET|POST /reviews/{courseId}
- PUT|DELETE /reviews/{courseId}/{reviewId} - Owner only

Dependencies: cognition_api.application.services.review_service
System role: Review HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import get_current_user, get_review_service
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.review_service import ReviewService
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.review import CreateReviewRequest, UpdateReviewRequest
from cognition_api.models.user import CurrentUser

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("")
@handle_service_errors
async def list_reviews(
    user: CurrentUser = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> list[dict[str, Any]]:
    return await review_service.list_all()


@router.get("/{course_id}")
@handle_service_errors
async def list_course_reviews(
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> list[dict[str, Any]]:
    return await review_service.list_for_course(course_id)


@router.post("/{course_id}", status_code=201)
@handle_service_errors
async def add_review(
    course_id: str,
    request: CreateReviewRequest,
    user: CurrentUser = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> dict[str, Any]:
    """
    Append a review to a course.

    Raises:
        HTTPException(404): No review document for the course
    """
    review = await review_service.add_review(course_id, request.model_dump(), user.model_dump())
    return {"message": "Review added successfully", "review": review}


@router.put("/{course_id}/{review_id}", response_model=MessageResponse)
@handle_service_errors
async def update_review(
    course_id: str,
    review_id: str,
    request: UpdateReviewRequest,
    user: CurrentUser = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> MessageResponse:
    await review_service.update_review(course_id, review_id, user.uid, sent_fields(request))
    return MessageResponse(message="Review updated successfully")


@router.delete("/{course_id}/{review_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_review(
    course_id: str,
    review_id: str,
    user: CurrentUser = Depends(get_current_user),
    review_service: ReviewService = Depends(get_review_service),
) -> MessageResponse:
    await review_service.delete_review(course_id, review_id, user.uid)
    return MessageResponse(message="Review deleted successfully")
