"""
Base CRUD operations for MongoDB collections.

Provides generic Create, Read, Update, Delete operations that can be
inherited and extended by collection-specific CRUD classes.

Dependencies: motor, pymongo, bson
System role: Foundation for all database CRUD operations
"""

from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument

Document = dict[str, Any]


class BaseCRUD:
    """
    Generic base class for CRUD operations.

    Provides standard database operations that work with any collection.
    Subclasses fix the collection name and add collection-specific queries.

    Attributes:
        collection_name: Name of the MongoDB collection to operate on
    """

    def __init__(self, collection_name: str) -> None:
        """
        Initialize CRUD with target collection.

        Args:
            collection_name: MongoDB collection name
        """
        self.collection_name = collection_name

    def collection(self, db: AsyncIOMotorDatabase) -> AsyncIOMotorCollection:
        """Resolve the collection on the given database."""
        return db[self.collection_name]

    async def create(self, db: AsyncIOMotorDatabase, document: Document) -> Document:
        """
        Insert a new document.

        Args:
            db: Async database handle
            document: Field values (left unmodified)

        Returns:
            Inserted document including its generated _id
        """
        stored = dict(document)
        result = await self.collection(db).insert_one(stored)
        stored["_id"] = result.inserted_id
        return stored

    async def get_by_id(self, db: AsyncIOMotorDatabase, id: ObjectId) -> Document | None:
        """
        Retrieve a single document by _id.

        Args:
            db: Async database handle
            id: Document ObjectId

        Returns:
            Document if found, None otherwise
        """
        return await self.collection(db).find_one({"_id": id})

    async def find_one(self, db: AsyncIOMotorDatabase, query: Document) -> Document | None:
        return await self.collection(db).find_one(query)

    async def find_many(
        self,
        db: AsyncIOMotorDatabase,
        query: Document | None = None,
        sort: list[tuple[str, int]] | None = None,
        limit: int | None = None,
    ) -> list[Document]:
        """
        Retrieve all documents matching a query.

        Args:
            db: Async database handle
            query: Filter (all documents when None)
            sort: Optional sort specification
            limit: Maximum number of documents (None for all)

        Returns:
            List of documents
        """
        cursor = self.collection(db).find(query or {})
        if sort:
            cursor = cursor.sort(sort)
        if limit is not None:
            cursor = cursor.limit(limit)
        return await cursor.to_list(length=None)

    async def update_one(
        self,
        db: AsyncIOMotorDatabase,
        query: Document,
        updates: Document,
        upsert: bool = False,
    ) -> Document | None:
        """
        Apply an update to the first matching document.

        Args:
            db: Async database handle
            query: Filter
            updates: Update operators ($set, $unset, ...)
            upsert: Insert when nothing matches

        Returns:
            Updated document if found (or upserted), None otherwise
        """
        return await self.collection(db).find_one_and_update(
            query,
            updates,
            upsert=upsert,
            return_document=ReturnDocument.AFTER,
        )

    async def update_by_id(
        self,
        db: AsyncIOMotorDatabase,
        id: ObjectId,
        fields: Document,
    ) -> Document | None:
        """
        Set fields on a document by _id.

        Returns:
            Updated document if found, None otherwise
        """
        return await self.update_one(db, {"_id": id}, {"$set": fields})

    async def delete_one(self, db: AsyncIOMotorDatabase, query: Document) -> bool:
        result = await self.collection(db).delete_one(query)
        return result.deleted_count > 0

    async def delete_by_id(self, db: AsyncIOMotorDatabase, id: ObjectId) -> bool:
        """
        Delete a document by _id.

        Returns:
            True if a document was deleted, False if not found
        """
        return await self.delete_one(db, {"_id": id})

    async def count(self, db: AsyncIOMotorDatabase, query: Document | None = None) -> int:
        return await self.collection(db).count_documents(query or {})

    async def exists(self, db: AsyncIOMotorDatabase, id: ObjectId) -> bool:
        """
        Check if a document exists by _id.

        Returns:
            True if document exists, False otherwise
        """
        return await self.collection(db).count_documents({"_id": id}, limit=1) > 0
