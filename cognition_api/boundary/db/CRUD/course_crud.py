"""
Course CRUD operations.

Extends BaseCRUD with course lookups by external course_id or _id, the
image-resolving aggregation, and the atomic image reference swap.

Dependencies: motor, pymongo, bson, cognition_api.boundary.db
System role: Course persistence and course-to-image join
"""

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document
from cognition_api.boundary.db.object_ids import id_or_external_filter

IMAGE_FIELDS = ("image", "imageType", "imageUrl")

# Left-join each course to its image document. Legacy path strings and empty
# values fail the conversion and yield no imageData.
RESOLVE_IMAGE_STAGES: list[Document] = [
    {
        "$addFields": {
            "imageObjectId": {
                "$convert": {
                    "input": "$image",
                    "to": "objectId",
                    "onError": None,
                    "onNull": None,
                }
            }
        }
    },
    {
        "$lookup": {
            "from": collections.IMAGES,
            "localField": "imageObjectId",
            "foreignField": "_id",
            "as": "imageData",
        }
    },
    {"$unwind": {"path": "$imageData", "preserveNullAndEmptyArrays": True}},
    {"$project": {"imageObjectId": 0}},
]


class CourseCRUD(BaseCRUD):
    """CRUD operations for the material-courses collection."""

    def __init__(self) -> None:
        super().__init__(collections.COURSES)

    @staticmethod
    def identifier_filter(course_id: str) -> Document:
        """Match by external course_id, or by _id when the value is an ObjectId."""
        return id_or_external_filter(course_id, "course_id")

    async def get_by_identifier(self, db: AsyncIOMotorDatabase, course_id: str) -> Document | None:
        return await self.find_one(db, self.identifier_filter(course_id))

    async def list_with_images(self, db: AsyncIOMotorDatabase) -> list[Document]:
        """
        Retrieve every course with its image document joined as imageData.

        Returns:
            List of course documents
        """
        cursor = self.collection(db).aggregate(list(RESOLVE_IMAGE_STAGES))
        return await cursor.to_list(length=None)

    async def get_with_image(self, db: AsyncIOMotorDatabase, course_id: str) -> Document | None:
        """
        Retrieve one course by identifier with imageData joined.

        Returns:
            Course document if found, None otherwise
        """
        pipeline = [
            {"$match": self.identifier_filter(course_id)},
            *RESOLVE_IMAGE_STAGES,
            {"$limit": 1},
        ]
        courses = await self.collection(db).aggregate(pipeline).to_list(length=None)
        return courses[0] if courses else None

    async def swap_image(
        self,
        db: AsyncIOMotorDatabase,
        course_oid: ObjectId,
        image_id: str,
        image_url: str,
        updated_by: str | None,
    ) -> Document | None:
        """
        Point a course at a new image in one atomic update.

        Args:
            db: Async database handle
            course_oid: Course _id
            image_id: New image document id (string form)
            image_url: Public URL of the new image
            updated_by: uid of the uploading user

        Returns:
            The course document as it was before the update, None if it vanished
        """
        return await self.collection(db).find_one_and_update(
            {"_id": course_oid},
            {
                "$set": {
                    "image": image_id,
                    "imageType": "base64",
                    "imageUrl": image_url,
                    "updatedAt": datetime.now(timezone.utc),
                    "updatedBy": updated_by,
                }
            },
            return_document=ReturnDocument.BEFORE,
        )

    async def clear_image(
        self,
        db: AsyncIOMotorDatabase,
        course_oid: ObjectId,
        expected_image: Any,
        updated_by: str | None,
    ) -> Document | None:
        """
        Remove the image fields if the course still references expected_image.

        Returns:
            The course before the update, None if the reference had changed
        """
        return await self.collection(db).find_one_and_update(
            {"_id": course_oid, "image": expected_image},
            {
                "$unset": {field: "" for field in IMAGE_FIELDS},
                "$set": {"updatedAt": datetime.now(timezone.utc), "updatedBy": updated_by},
            },
            return_document=ReturnDocument.BEFORE,
        )

    async def delete_by_identifier(self, db: AsyncIOMotorDatabase, course_id: str) -> Document | None:
        """
        Delete a course by identifier.

        Returns:
            The deleted document, None if nothing matched
        """
        return await self.collection(db).find_one_and_delete(self.identifier_filter(course_id))


course_crud = CourseCRUD()
