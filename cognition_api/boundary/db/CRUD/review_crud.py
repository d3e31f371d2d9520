"""
Review CRUD operations.

Reviews are stored as one document per course with an embedded reviews
array; individual reviews are addressed by reviewId and owner uid.

Dependencies: motor, cognition_api.boundary.db
System role: Course review persistence
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


class ReviewCRUD(BaseCRUD):
    """CRUD operations for the reviews collection."""

    def __init__(self) -> None:
        super().__init__(collections.REVIEWS)

    async def get_for_course(self, db: AsyncIOMotorDatabase, course_id: str) -> Document | None:
        return await self.find_one(db, {"courseId": course_id})

    async def push_review(self, db: AsyncIOMotorDatabase, course_id: str, review: Document) -> bool:
        """
        Append a review to an existing course review document.

        Returns:
            False when the course has no review document
        """
        result = await self.collection(db).update_one(
            {"courseId": course_id}, {"$push": {"reviews": review}}
        )
        return result.matched_count > 0

    async def set_review_fields(
        self, db: AsyncIOMotorDatabase, course_id: str, review_id: str, uid: str, fields: Document
    ) -> bool:
        """
        Update fields of one review owned by uid.

        Returns:
            False when no review with that id belongs to the user
        """
        result = await self.collection(db).update_one(
            {
                "courseId": course_id,
                "reviews": {"$elemMatch": {"reviewId": review_id, "uid": uid}},
            },
            {"$set": {f"reviews.$.{name}": value for name, value in fields.items()}},
        )
        return result.matched_count > 0

    async def pull_review(
        self, db: AsyncIOMotorDatabase, course_id: str, review_id: str, uid: str
    ) -> bool:
        result = await self.collection(db).update_one(
            {"courseId": course_id},
            {"$pull": {"reviews": {"reviewId": review_id, "uid": uid}}},
        )
        return result.modified_count > 0


review_crud = ReviewCRUD()
