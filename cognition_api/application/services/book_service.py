"""
Material book service orchestrator.

Books are read with their image joined; the client gets the image as
displayImage (a data URL or None) with a hasImage flag instead of the raw
imageData document.

Dependencies: cognition_api.boundary.db.CRUD
System role: Material book use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.application.services.image_service import resolve_embedded_image
from cognition_api.boundary.db.CRUD.book_crud import book_crud
from cognition_api.boundary.db.serialization import serialize_document
from cognition_api.core.exceptions import BookNotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


def with_display_image(book: dict[str, Any]) -> dict[str, Any]:
    """Replace the joined imageData with displayImage and hasImage."""
    book = resolve_embedded_image(book)
    image_data = book.pop("imageData", None)
    display_image = image_data.get("data") if isinstance(image_data, dict) else None
    book["displayImage"] = display_image
    book["hasImage"] = display_image is not None
    return book


class BookService:
    """Material book service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def list_books(self) -> list[dict[str, Any]]:
        books = await book_crud.list_with_images(self.db)
        return [with_display_image(book) for book in books]

    async def get_book(self, book_id: str) -> dict[str, Any]:
        """
        Get one book by book_id or _id, image resolved.

        Raises:
            BookNotFoundError: If no book matches
        """
        book = await book_crud.get_with_image(self.db, book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return with_display_image(book)

    async def create_book(self, fields: dict[str, Any], created_by: str | None) -> dict[str, Any]:
        book = await book_crud.create(self.db, {**fields, "createdAt": utcnow(), "createdBy": created_by})
        logger.info("Book created", extra={"book_id": str(book["_id"]), "book_title": fields.get("title")})
        return serialize_document(book)

    async def update_book(
        self, book_id: str, fields: dict[str, Any], updated_by: str | None
    ) -> dict[str, Any]:
        """
        Update book fields.

        Raises:
            BookNotFoundError: If no book matches
        """
        updated = await book_crud.update_by_identifier(
            self.db, book_id, {**fields, "updatedAt": utcnow(), "updatedBy": updated_by}
        )
        if updated is None:
            raise BookNotFoundError(book_id)
        logger.info("Book updated", extra={"book_id": book_id, "fields": sorted(fields)})
        return serialize_document(updated)

    async def delete_book(self, book_id: str) -> None:
        if not await book_crud.delete_by_identifier(self.db, book_id):
            raise BookNotFoundError(book_id)
        logger.info("Book deleted", extra={"book_id": book_id})
