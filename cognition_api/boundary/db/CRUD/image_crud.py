"""
Image CRUD operations.

Image documents hold base64 data URLs and are referenced from courses by the
string form of their _id.

Dependencies: motor, cognition_api.boundary.db
System role: Image persistence for course images
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document
from cognition_api.boundary.db.object_ids import to_object_id

COURSE_IMAGE_TYPE = "course_image"


class ImageCRUD(BaseCRUD):
    """CRUD operations for the images collection."""

    def __init__(self) -> None:
        super().__init__(collections.IMAGES)

    async def delete_reference(self, db: AsyncIOMotorDatabase, reference: object) -> bool:
        """
        Delete the image a course reference points at.

        Legacy path references are not image documents and are ignored.

        Returns:
            True if an image document was deleted
        """
        oid = to_object_id(reference)
        if oid is None:
            return False
        return await self.delete_by_id(db, oid)

    async def list_course_images(self, db: AsyncIOMotorDatabase) -> list[Document]:
        return await self.find_many(db, {"type": COURSE_IMAGE_TYPE})


image_crud = ImageCRUD()
