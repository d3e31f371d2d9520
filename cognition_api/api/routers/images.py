"""
Image resolver endpoint.

Routes: GET /api/images/{image_id}

Dependencies: cognition_api.application.services.image_service
System role: Serves stored course images as data URLs
"""

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import get_image_service
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.image_service import ImageService
from cognition_api.models.course import ImageResponse

router = APIRouter(prefix="/api/images", tags=["images"])


@router.get("/{image_id}", response_model=ImageResponse)
@handle_service_errors
async def get_image(
    image_id: str,
    image_service: ImageService = Depends(get_image_service),
) -> ImageResponse:
    """
    Resolve an image id to its stored data.

    Raises:
        HTTPException(400): image_id is not a valid ObjectId
        HTTPException(404): Image not found
    """
    return ImageResponse(**await image_service.get_image(image_id))
