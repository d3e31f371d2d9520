"""
User CRUD operations.

Users are keyed by the Firebase uid; admin routes address them by email.

Dependencies: motor, cognition_api.boundary.db
System role: User account persistence
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


class UserCRUD(BaseCRUD):
    """CRUD operations for the Users collection."""

    def __init__(self) -> None:
        super().__init__(collections.USERS)

    async def get_by_uid(self, db: AsyncIOMotorDatabase, uid: str) -> Document | None:
        return await self.find_one(db, {"uid": uid})

    async def get_by_email(self, db: AsyncIOMotorDatabase, email: str) -> Document | None:
        return await self.find_one(db, {"email": email})

    async def insert_if_absent(self, db: AsyncIOMotorDatabase, user: Document) -> Document | None:
        """
        Create the user unless a document with the same uid exists.

        Existing documents are never modified.

        Returns:
            The stored document (existing or new)
        """
        return await self.update_one(
            db, {"uid": user["uid"]}, {"$setOnInsert": user}, upsert=True
        )

    async def update_by_uid(
        self, db: AsyncIOMotorDatabase, uid: str, fields: Document, upsert: bool = False
    ) -> Document | None:
        fields = {**fields, "updatedAt": datetime.now(timezone.utc)}
        return await self.update_one(db, {"uid": uid}, {"$set": fields}, upsert=upsert)

    async def update_by_email(
        self, db: AsyncIOMotorDatabase, email: str, fields: Document
    ) -> Document | None:
        fields = {**fields, "updatedAt": datetime.now(timezone.utc)}
        return await self.update_one(db, {"email": email}, {"$set": fields})

    async def delete_by_email(self, db: AsyncIOMotorDatabase, email: str) -> bool:
        return await self.delete_one(db, {"email": email})


user_crud = UserCRUD()
