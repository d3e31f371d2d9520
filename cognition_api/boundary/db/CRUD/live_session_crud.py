"""
Live session and session booking CRUD operations.

Bookings reference their session by ObjectId. A booking is unique per
(sessionId, userId); the insert is an upsert on that pair so a repeated
request cannot create a second booking.

Dependencies: motor, pymongo, bson, cognition_api.boundary.db
System role: Live session persistence
"""

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document
from cognition_api.boundary.db.object_ids import id_or_external_filter


class LiveSessionCRUD(BaseCRUD):
    """CRUD operations for the live-sessions collection."""

    def __init__(self) -> None:
        super().__init__(collections.LIVE_SESSIONS)

    async def list_by_start(self, db: AsyncIOMotorDatabase) -> list[Document]:
        return await self.find_many(db, sort=[("startTime", 1)])

    async def adjust_participants(self, db: AsyncIOMotorDatabase, session_oid: ObjectId, delta: int) -> None:
        await self.collection(db).update_one({"_id": session_oid}, {"$inc": {"participants": delta}})

    async def update_by_identifier(
        self, db: AsyncIOMotorDatabase, session_id: str, fields: Document
    ) -> Document | None:
        return await self.collection(db).find_one_and_update(
            id_or_external_filter(session_id, "session_id"),
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )


class SessionBookingCRUD(BaseCRUD):
    """CRUD operations for the session-bookings collection."""

    def __init__(self) -> None:
        super().__init__(collections.SESSION_BOOKINGS)

    async def list_for_user(self, db: AsyncIOMotorDatabase, uid: str) -> list[Document]:
        return await self.find_many(db, {"userId": uid})

    async def count_for_session(self, db: AsyncIOMotorDatabase, session_oid: ObjectId) -> int:
        return await self.count(db, {"sessionId": session_oid})

    async def get_for_user(self, db: AsyncIOMotorDatabase, session_oid: ObjectId, uid: str) -> Document | None:
        return await self.find_one(db, {"sessionId": session_oid, "userId": uid})

    async def create_if_absent(self, db: AsyncIOMotorDatabase, booking: Document) -> Document | None:
        """
        Insert a booking unless the user already holds one for the session.

        Returns:
            The stored booking with its _id, None if one already existed
        """
        stored = dict(booking)
        result = await self.collection(db).update_one(
            {"sessionId": stored["sessionId"], "userId": stored["userId"]},
            {"$setOnInsert": stored},
            upsert=True,
        )
        if result.upserted_id is None:
            return None
        stored["_id"] = result.upserted_id
        return stored

    async def delete_for_user(self, db: AsyncIOMotorDatabase, session_oid: ObjectId, uid: str) -> bool:
        return await self.delete_one(db, {"sessionId": session_oid, "userId": uid})

    async def delete_for_session(self, db: AsyncIOMotorDatabase, session_oid: ObjectId) -> int:
        result = await self.collection(db).delete_many({"sessionId": session_oid})
        return result.deleted_count

    async def list_with_sessions(self, db: AsyncIOMotorDatabase, uid: str) -> list[Document]:
        """
        The user's bookings joined to their sessions, earliest session first.

        Bookings whose session no longer exists are dropped.
        """
        pipeline = [
            {"$match": {"userId": uid}},
            {
                "$lookup": {
                    "from": collections.LIVE_SESSIONS,
                    "localField": "sessionId",
                    "foreignField": "_id",
                    "as": "session",
                }
            },
            {"$unwind": "$session"},
            {"$sort": {"session.startTime": 1}},
        ]
        return await self.collection(db).aggregate(pipeline).to_list(length=None)


live_session_crud = LiveSessionCRUD()
session_booking_crud = SessionBookingCRUD()
