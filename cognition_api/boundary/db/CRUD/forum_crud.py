"""
Forum CRUD operations.

Posts and replies are owned by the uid that created them; updates and
deletes only match documents owned by the caller. Both accept either the
legacy string id (post_id / reply_id) or the ObjectId.

Dependencies: motor, cognition_api.boundary.db
System role: Forum persistence
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document
from cognition_api.boundary.db.object_ids import id_or_external_filter


class OwnedForumCRUD(BaseCRUD):
    """Forum collection whose documents are addressed by id and owner."""

    def __init__(self, collection_name: str, external_field: str) -> None:
        super().__init__(collection_name)
        self.external_field = external_field

    def owned_filter(self, item_id: str, uid: str) -> Document:
        return {"$and": [{"uid": uid}, id_or_external_filter(item_id, self.external_field)]}

    async def get_by_identifier(self, db: AsyncIOMotorDatabase, item_id: str) -> Document | None:
        return await self.find_one(db, id_or_external_filter(item_id, self.external_field))

    async def update_owned(
        self, db: AsyncIOMotorDatabase, item_id: str, uid: str, fields: Document
    ) -> Document | None:
        return await self.update_one(db, self.owned_filter(item_id, uid), {"$set": fields})

    async def delete_owned(self, db: AsyncIOMotorDatabase, item_id: str, uid: str) -> bool:
        return await self.delete_one(db, self.owned_filter(item_id, uid))


class ForumReplyCRUD(OwnedForumCRUD):
    """CRUD operations for the forum-replies collection."""

    def __init__(self) -> None:
        super().__init__(collections.FORUM_REPLIES, "reply_id")

    async def list_for_post(self, db: AsyncIOMotorDatabase, post_ids: list[str]) -> list[Document]:
        """Replies whose postId matches any identifier of the post."""
        return await self.find_many(db, {"postId": {"$in": post_ids}})


forum_post_crud = OwnedForumCRUD(collections.FORUM_POSTS, "post_id")
forum_reply_crud = ForumReplyCRUD()
