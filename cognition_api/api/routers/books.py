"""
Material book API endpoints.

Routes:
- GET /material-books - Books with displayImage and hasImage
- GET /material-books/{id} - One book by book_id or _id
- POST /material-books - Create (admin)
- PUT|DELETE /material-books/{id} - Update or delete (admin)

Dependencies: cognition_api.application.services.book_service
System role: Material book HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import get_book_service, require_admin
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.book_service import BookService
from cognition_api.core.exceptions import ValidationError
from cognition_api.models.book import RESERVED_BOOK_FIELDS, CreateBookRequest, UpdateBookRequest
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.user import CurrentUser

router = APIRouter(prefix="/material-books", tags=["books"])


def _writable(fields: dict[str, Any]) -> dict[str, Any]:
    reserved = sorted(RESERVED_BOOK_FIELDS.intersection(fields))
    if reserved:
        raise ValidationError(f"Field(s) {', '.join(reserved)} cannot be set", field=reserved[0])
    return fields


@router.get("")
@handle_service_errors
async def list_books(
    book_service: BookService = Depends(get_book_service),
) -> list[dict[str, Any]]:
    return await book_service.list_books()


@router.get("/{book_id}")
@handle_service_errors
async def get_book(
    book_id: str,
    book_service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """
    Get a book by its external book_id or internal _id.

    Raises:
        HTTPException(404): Book not found
    """
    return await book_service.get_book(book_id)


@router.post("", status_code=201)
@handle_service_errors
async def create_book(
    request: CreateBookRequest,
    admin: CurrentUser = Depends(require_admin),
    book_service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    return await book_service.create_book(_writable(sent_fields(request)), created_by=admin.uid)


@router.put("/{book_id}")
@handle_service_errors
async def update_book(
    book_id: str,
    request: UpdateBookRequest,
    admin: CurrentUser = Depends(require_admin),
    book_service: BookService = Depends(get_book_service),
) -> dict[str, Any]:
    """
    Partially update a book.

    Raises:
        HTTPException(400): No fields or computed fields sent
        HTTPException(404): Book not found
    """
    fields = _writable(sent_fields(request))
    if not fields:
        raise ValidationError("At least one field must be provided for update")
    return await book_service.update_book(book_id, fields, updated_by=admin.uid)


@router.delete("/{book_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_book(
    book_id: str,
    admin: CurrentUser = Depends(require_admin),
    book_service: BookService = Depends(get_book_service),
) -> MessageResponse:
    await book_service.delete_book(book_id)
    return MessageResponse(message="Book deleted")
