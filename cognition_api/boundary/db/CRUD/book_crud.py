"""
Material book CRUD operations.

Books are looked up by external book_id or _id and carry the same string
image reference as courses, resolved through the shared image join.

Dependencies: motor, pymongo, cognition_api.boundary.db
System role: Material book persistence
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document
from cognition_api.boundary.db.CRUD.course_crud import RESOLVE_IMAGE_STAGES
from cognition_api.boundary.db.object_ids import id_or_external_filter


class BookCRUD(BaseCRUD):
    """CRUD operations for the material-books collection."""

    def __init__(self) -> None:
        super().__init__(collections.BOOKS)

    @staticmethod
    def identifier_filter(book_id: str) -> Document:
        return id_or_external_filter(book_id, "book_id")

    async def list_with_images(self, db: AsyncIOMotorDatabase) -> list[Document]:
        cursor = self.collection(db).aggregate(list(RESOLVE_IMAGE_STAGES))
        return await cursor.to_list(length=None)

    async def get_with_image(self, db: AsyncIOMotorDatabase, book_id: str) -> Document | None:
        pipeline = [
            {"$match": self.identifier_filter(book_id)},
            *RESOLVE_IMAGE_STAGES,
            {"$limit": 1},
        ]
        books = await self.collection(db).aggregate(pipeline).to_list(length=None)
        return books[0] if books else None

    async def update_by_identifier(
        self, db: AsyncIOMotorDatabase, book_id: str, fields: Document
    ) -> Document | None:
        """
        Set fields on a book matched by book_id or _id.

        Returns:
            The updated book, None if nothing matched
        """
        return await self.collection(db).find_one_and_update(
            self.identifier_filter(book_id),
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )

    async def delete_by_identifier(self, db: AsyncIOMotorDatabase, book_id: str) -> bool:
        return await self.delete_one(db, self.identifier_filter(book_id))


book_crud = BookCRUD()
