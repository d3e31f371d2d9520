"""
Enrollment CRUD operations.

An enrollment links a user uid to a course identifier as given on the route
(course_id or _id string).

Dependencies: motor, cognition_api.boundary.db
System role: Enrollment persistence
"""

from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


class EnrollmentCRUD(BaseCRUD):
    """CRUD operations for the enrollments collection."""

    def __init__(self) -> None:
        super().__init__(collections.ENROLLMENTS)

    async def get_for_user(self, db: AsyncIOMotorDatabase, uid: str, course_id: str) -> Document | None:
        return await self.find_one(db, {"uid": uid, "courseId": course_id})

    async def list_for_user(self, db: AsyncIOMotorDatabase, uid: str) -> list[Document]:
        return await self.find_many(db, {"uid": uid})

    async def delete_for_user(self, db: AsyncIOMotorDatabase, uid: str, course_id: str) -> bool:
        return await self.delete_one(db, {"uid": uid, "courseId": course_id})

    async def set_progress(
        self,
        db: AsyncIOMotorDatabase,
        uid: str,
        course_id: str,
        percent: int | None,
        touch: bool = True,
    ) -> None:
        """Mirror a progress percentage onto the enrollment and record the access."""
        fields: Document = {}
        if percent is not None:
            fields["progress"] = percent
        if touch:
            fields["lastAccessedAt"] = datetime.now(timezone.utc)
        if not fields:
            return
        await self.collection(db).update_one({"uid": uid, "courseId": course_id}, {"$set": fields})


enrollment_crud = EnrollmentCRUD()
