"""
Live session API endpoints.

Routes:
- GET /live-sessions - Schedule with status and isBooked for the caller
- POST /live-sessions/{id}/book - Book a seat
- POST /live-sessions/{id}/cancel-booking - Cancel the caller's booking
- GET /my-bookings - Caller's bookings with their sessions
- POST /live-sessions - Create (admin)
- PUT|DELETE /live-sessions/{id} - Update or delete with bookings (admin)

Dependencies: cognition_api.application.services.live_session_service
System role: Live session HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import (
    get_current_user,
    get_live_session_service,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.live_session_service import LiveSessionService
from cognition_api.core.exceptions import ValidationError
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.live_session import (
    RESERVED_SESSION_FIELDS,
    CreateLiveSessionRequest,
    UpdateLiveSessionRequest,
)
from cognition_api.models.user import CurrentUser

router = APIRouter(tags=["live-sessions"])


def _writable(fields: dict[str, Any]) -> dict[str, Any]:
    reserved = sorted(RESERVED_SESSION_FIELDS.intersection(fields))
    if reserved:
        raise ValidationError(f"Field(s) {', '.join(reserved)} cannot be set", field=reserved[0])
    return fields


@router.get("/live-sessions")
@handle_service_errors
async def list_sessions(
    user: CurrentUser = Depends(get_current_user),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> list[dict[str, Any]]:
    return await live_session_service.list_sessions(user.uid)


@router.post("/live-sessions/{session_id}/book")
@handle_service_errors
async def book_session(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> dict[str, Any]:
    """
    Book a seat on a session.

    Raises:
        HTTPException(400): Bad id, already started, already booked or full
        HTTPException(404): Session not found
    """
    return await live_session_service.book(session_id, user.model_dump())


@router.post("/live-sessions/{session_id}/cancel-booking")
@handle_service_errors
async def cancel_booking(
    session_id: str,
    user: CurrentUser = Depends(get_current_user),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> dict[str, Any]:
    return await live_session_service.cancel_booking(session_id, user.uid)


@router.get("/my-bookings")
@handle_service_errors
async def my_bookings(
    user: CurrentUser = Depends(get_current_user),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> list[dict[str, Any]]:
    return await live_session_service.my_bookings(user.uid)


@router.post("/live-sessions", status_code=201)
@handle_service_errors
async def create_session(
    request: CreateLiveSessionRequest,
    admin: CurrentUser = Depends(require_admin),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> dict[str, Any]:
    return await live_session_service.create_session(_writable(sent_fields(request)), created_by=admin.uid)


@router.put("/live-sessions/{session_id}")
@handle_service_errors
async def update_session(
    session_id: str,
    request: UpdateLiveSessionRequest,
    admin: CurrentUser = Depends(require_admin),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> dict[str, Any]:
    fields = _writable(sent_fields(request))
    if not fields:
        raise ValidationError("At least one field must be provided for update")
    return await live_session_service.update_session(session_id, fields, updated_by=admin.uid)


@router.delete("/live-sessions/{session_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_session(
    session_id: str,
    admin: CurrentUser = Depends(require_admin),
    live_session_service: LiveSessionService = Depends(get_live_session_service),
) -> MessageResponse:
    await live_session_service.delete_session(session_id)
    return MessageResponse(message="Session deleted")
