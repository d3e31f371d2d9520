"""
Forum API endpoints.

Routes:
- GET /forum-posts, POST /forum-posts
- PUT|DELETE /forum-posts/{id} - Owner only
- GET /forum-posts/{id}/thread - Post with threaded replies
- GET /forum-replies?postId=, POST /forum-replies
- PUT|DELETE /forum-replies/{id} - Owner only

Dependencies: cognition_api.application.services.forum_service
System role: Forum HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import get_current_user, get_forum_service
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.forum_service import ForumService
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.forum import (
    CreatePostRequest,
    CreateReplyRequest,
    UpdatePostRequest,
    UpdateReplyRequest,
)
from cognition_api.models.user import CurrentUser

router = APIRouter(tags=["forum"])


@router.get("/forum-posts")
@handle_service_errors
async def list_posts(
    forum_service: ForumService = Depends(get_forum_service),
) -> list[dict[str, Any]]:
    return await forum_service.list_posts()


@router.post("/forum-posts", status_code=201)
@handle_service_errors
async def create_post(
    request: CreatePostRequest,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> dict[str, Any]:
    return await forum_service.create_post(sent_fields(request), user.model_dump())


@router.put("/forum-posts/{post_id}")
@handle_service_errors
async def update_post(
    post_id: str,
    request: UpdatePostRequest,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> dict[str, Any]:
    """
    Update a post owned by the caller.

    Raises:
        HTTPException(404): No such post, or the caller does not own it
    """
    return await forum_service.update_post(post_id, user.uid, _editable(sent_fields(request)))


@router.delete("/forum-posts/{post_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_post(
    post_id: str,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> MessageResponse:
    await forum_service.delete_post(post_id, user.uid)
    return MessageResponse(message="Forum post deleted")


@router.get("/forum-posts/{post_id}/thread")
@handle_service_errors
async def get_thread(
    post_id: str,
    forum_service: ForumService = Depends(get_forum_service),
) -> dict[str, Any]:
    """
    Get a post with its replies nested by parentReplyId.

    Each reply node carries depth, canReply and children.

    Raises:
        HTTPException(404): Post not found
    """
    return await forum_service.get_thread(post_id)


@router.get("/forum-replies")
@handle_service_errors
async def list_replies(
    postId: str | None = None,
    forum_service: ForumService = Depends(get_forum_service),
) -> list[dict[str, Any]]:
    return await forum_service.list_replies(postId)


@router.post("/forum-replies", status_code=201)
@handle_service_errors
async def create_reply(
    request: CreateReplyRequest,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> dict[str, Any]:
    return await forum_service.create_reply(sent_fields(request), user.model_dump())


@router.put("/forum-replies/{reply_id}")
@handle_service_errors
async def update_reply(
    reply_id: str,
    request: UpdateReplyRequest,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> dict[str, Any]:
    return await forum_service.update_reply(reply_id, user.uid, _editable(sent_fields(request)))


@router.delete("/forum-replies/{reply_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_reply(
    reply_id: str,
    user: CurrentUser = Depends(get_current_user),
    forum_service: ForumService = Depends(get_forum_service),
) -> MessageResponse:
    await forum_service.delete_reply(reply_id, user.uid)
    return MessageResponse(message="Reply deleted")


def _editable(fields: dict[str, Any]) -> dict[str, Any]:
    # Ownership fields stay with the author
    return {
        name: value
        for name, value in fields.items()
        if name not in ("_id", "uid", "userEmail", "createdAt")
    }
