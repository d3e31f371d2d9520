"""
Forum service orchestrator.

Posts and replies are world-readable; writes are limited to the owner.

Dependencies: cognition_api.boundary.db.CRUD, cognition_api.core.reply_threading
System role: Forum use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.forum_crud import forum_post_crud, forum_reply_crud
from cognition_api.boundary.db.serialization import serialize_document, serialize_documents
from cognition_api.core.exceptions import NotFoundError
from cognition_api.core.reply_threading import build_reply_tree
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


class ForumService:
    """Forum service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def list_posts(self) -> list[dict[str, Any]]:
        return serialize_documents(await forum_post_crud.find_many(self.db))

    async def create_post(self, fields: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
        post = await forum_post_crud.create(
            self.db,
            {**fields, "uid": user["uid"], "userEmail": user.get("email"), "createdAt": utcnow()},
        )
        logger.info("Forum post created", extra={"post_id": str(post["_id"]), "uid": user["uid"]})
        return serialize_document(post)

    async def update_post(self, post_id: str, uid: str, fields: dict[str, Any]) -> dict[str, Any]:
        post = await forum_post_crud.update_owned(
            self.db, post_id, uid, {**fields, "updatedAt": utcnow()}
        )
        if post is None:
            raise NotFoundError("Forum post not found or access denied", {"post_id": post_id})
        return serialize_document(post)

    async def delete_post(self, post_id: str, uid: str) -> None:
        if not await forum_post_crud.delete_owned(self.db, post_id, uid):
            raise NotFoundError("Forum post not found or access denied", {"post_id": post_id})

    async def list_replies(self, post_id: str | None = None) -> list[dict[str, Any]]:
        query = {"postId": post_id} if post_id else None
        return serialize_documents(await forum_reply_crud.find_many(self.db, query))

    async def create_reply(self, fields: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
        reply = await forum_reply_crud.create(
            self.db,
            {
                "parentReplyId": None,
                **fields,
                "userName": fields.get("userName") or user.get("name") or "",
                "uid": user["uid"],
                "userEmail": user.get("email"),
                "createdAt": utcnow(),
            },
        )
        logger.info(
            "Forum reply created",
            extra={"reply_id": str(reply["_id"]), "post_id": fields.get("postId")},
        )
        return serialize_document(reply)

    async def update_reply(self, reply_id: str, uid: str, fields: dict[str, Any]) -> dict[str, Any]:
        reply = await forum_reply_crud.update_owned(
            self.db, reply_id, uid, {**fields, "updatedAt": utcnow()}
        )
        if reply is None:
            raise NotFoundError("Reply not found or access denied", {"reply_id": reply_id})
        return serialize_document(reply)

    async def delete_reply(self, reply_id: str, uid: str) -> None:
        if not await forum_reply_crud.delete_owned(self.db, reply_id, uid):
            raise NotFoundError("Reply not found or access denied", {"reply_id": reply_id})

    async def get_thread(self, post_id: str) -> dict[str, Any]:
        """
        Get a post with its replies arranged as a tree.

        Replies may reference the post by post_id or by _id string.

        Returns:
            dict: post and replies (root nodes with nested children)

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await forum_post_crud.get_by_identifier(self.db, post_id)
        if post is None:
            raise NotFoundError("Forum post not found", {"post_id": post_id})

        identifiers = {str(post["_id"]), post_id}
        if post.get("post_id"):
            identifiers.add(str(post["post_id"]))
        replies = serialize_documents(await forum_reply_crud.list_for_post(self.db, sorted(identifiers)))
        return {"post": serialize_document(post), "replies": build_reply_tree(replies)}
