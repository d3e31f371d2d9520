"""
User API endpoints.

Routes:
- POST /users - Public sign-up
- GET /me, PUT /me - Own profile
- POST /api/upload-profile - Profile picture upload (multipart)
- GET /users - List users (admin)
- GET|PUT|DELETE /users/{email} - Manage one user (admin)

Dependencies: cognition_api.application.services.user_service
System role: User account HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from cognition_api.api.deps.dependencies import (
    get_avatar_store,
    get_current_user,
    get_settings_dependency,
    get_user_service,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.user_service import UserService
from cognition_api.boundary.storage.avatar_store import AvatarStore
from cognition_api.configs import Settings
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.user import (
    PROTECTED_PROFILE_FIELDS,
    AdminUpdateUserRequest,
    AvatarUploadResponse,
    CurrentUser,
    RegisterUserRequest,
    UpdateProfileRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/users", status_code=201)
@handle_service_errors
async def register_user(
    request: RegisterUserRequest,
    user_service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    """
    Register a user after sign-up on the client.

    Raises:
        HTTPException(400): Email domain has no mail exchanger
    """
    return await user_service.register(
        request.uid, request.email, request.name, requested_role=request.role
    )


@router.get("/me")
@handle_service_errors
async def get_me(
    user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    return await user_service.get_profile(user.model_dump())


@router.put("/me")
@handle_service_errors
async def update_me(
    request: UpdateProfileRequest,
    user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    """Update own profile; identity and role fields are ignored."""
    fields = {
        name: value
        for name, value in sent_fields(request).items()
        if name not in PROTECTED_PROFILE_FIELDS
    }
    return await user_service.update_profile(user.uid, fields)


@router.post("/api/upload-profile", response_model=AvatarUploadResponse)
@handle_service_errors
async def upload_profile_picture(
    request: Request,
    profilePicture: UploadFile | None = File(None),
    user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings_dependency),
    avatar_store: AvatarStore = Depends(get_avatar_store),
    user_service: UserService = Depends(get_user_service),
) -> AvatarUploadResponse:
    """
    Store a profile picture and set it as the caller's avatar.

    Returns:
        AvatarUploadResponse: Absolute URL of the stored file

    Raises:
        HTTPException(400): No file, not an image, or too large
    """
    if profilePicture is None or not profilePicture.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded.")
    if not (profilePicture.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")

    content = await profilePicture.read()
    if len(content) > settings.server.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="File too large. Maximum 5MB"
        )

    path = await run_in_threadpool(avatar_store.save, profilePicture.filename, content)
    image_url = str(request.base_url).rstrip("/") + path
    await user_service.set_avatar(user.uid, image_url)
    return AvatarUploadResponse(imageUrl=image_url)


@router.get("/users")
@handle_service_errors
async def list_users(
    admin: CurrentUser = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> list[dict[str, Any]]:
    return await user_service.list_users()


@router.get("/users/{email}")
@handle_service_errors
async def get_user(
    email: str,
    admin: CurrentUser = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    return await user_service.get_user(email)


@router.put("/users/{email}")
@handle_service_errors
async def update_user(
    email: str,
    request: AdminUpdateUserRequest,
    admin: CurrentUser = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> dict[str, Any]:
    fields = {name: value for name, value in sent_fields(request).items() if name != "_id"}
    logger.info("Admin updating user", extra={"email": email, "admin_uid": admin.uid})
    return await user_service.update_user(email, fields)


@router.delete("/users/{email}", response_model=MessageResponse)
@handle_service_errors
async def delete_user(
    email: str,
    admin: CurrentUser = Depends(require_admin),
    user_service: UserService = Depends(get_user_service),
) -> MessageResponse:
    await user_service.delete_user(email)
    return MessageResponse(message="User deleted")
