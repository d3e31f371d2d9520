"""
Course progress CRUD operations.

One UserCourseProgress document per (userId, courseId). Writes upsert so a
record exists after the first interaction with a course.

Dependencies: motor, cognition_api.boundary.db
System role: Lesson progress persistence
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


def initial_progress(user_id: str, course_id: str) -> Document:
    """Empty progress record for a user and course."""
    now = datetime.now(timezone.utc)
    return {
        "userId": user_id,
        "courseId": course_id,
        "completedLessons": [],
        "videoPositions": {},
        "quizScores": {},
        "lessonAttempts": {},
        "percentComplete": 0,
        "lastOpenedLesson": None,
        "createdAt": now,
        "updatedAt": now,
    }


class ProgressCRUD(BaseCRUD):
    """CRUD operations for the UserCourseProgress collection."""

    def __init__(self) -> None:
        super().__init__(collections.PROGRESS)

    @staticmethod
    def key(user_id: str, course_id: str) -> Document:
        return {"userId": user_id, "courseId": course_id}

    async def get_for_user(self, db: AsyncIOMotorDatabase, user_id: str, course_id: str) -> Document | None:
        return await self.find_one(db, self.key(user_id, course_id))

    async def list_for_user(self, db: AsyncIOMotorDatabase, user_id: str) -> list[Document]:
        return await self.find_many(db, {"userId": user_id})

    async def upsert(
        self,
        db: AsyncIOMotorDatabase,
        user_id: str,
        course_id: str,
        fields: Document,
        on_insert: Document | None = None,
    ) -> Document | None:
        """
        Set fields on the progress record, creating it when missing.

        Args:
            db: Async database handle
            user_id: Owner uid
            course_id: Course identifier
            fields: Values for $set (dotted paths allowed)
            on_insert: Extra values written only when the record is created

        Returns:
            The progress record after the update
        """
        insert_defaults = {"createdAt": datetime.now(timezone.utc), **(on_insert or {})}
        # $setOnInsert may not touch paths that $set already writes
        insert_defaults = {
            name: value
            for name, value in insert_defaults.items()
            if not any(path == name or path.startswith(f"{name}.") for path in fields)
        }
        updates: Document = {"$set": {**fields, "updatedAt": datetime.now(timezone.utc)}}
        if insert_defaults:
            updates["$setOnInsert"] = insert_defaults
        return await self.update_one(db, self.key(user_id, course_id), updates, upsert=True)

    async def reset(self, db: AsyncIOMotorDatabase, user_id: str, course_id: str) -> Document:
        """Overwrite the record with an empty one and return it."""
        record = initial_progress(user_id, course_id)
        await self.collection(db).find_one_and_update(
            self.key(user_id, course_id), {"$set": record}, upsert=True
        )
        return record


progress_crud = ProgressCRUD()
