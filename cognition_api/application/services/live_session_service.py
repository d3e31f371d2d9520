"""
Live session service orchestrator.

Coordinates the session schedule, per-user bookings and the admin session
lifecycle. The participants counter on a session moves with each booking
and cancellation.

Dependencies: cognition_api.boundary.db.CRUD, cognition_api.core.live_sessions
System role: Live session use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.live_session_crud import live_session_crud, session_booking_crud
from cognition_api.boundary.db.object_ids import require_object_id
from cognition_api.boundary.db.serialization import serialize_document
from cognition_api.core.exceptions import (
    BookingNotFoundError,
    ConflictError,
    LiveSessionNotFoundError,
    ValidationError,
)
from cognition_api.core.live_sessions import (
    DEFAULT_CATEGORY,
    DEFAULT_MAX_PARTICIPANTS,
    SESSION_DEFAULTS,
    has_started,
    is_full,
    session_status,
)
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)

INVALID_SESSION_ID = "Invalid session ID"


class LiveSessionService:
    """Live session service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        """
        Initialize live session service.

        Args:
            db: Async database handle
        """
        self.db = db

    async def list_sessions(self, uid: str) -> list[dict[str, Any]]:
        """
        Every session by start time with its current status and whether
        the caller has booked it.
        """
        sessions = await live_session_crud.list_by_start(self.db)
        bookings = await session_booking_crud.list_for_user(self.db, uid)
        booked = {str(booking.get("sessionId")) for booking in bookings}
        now = utcnow()

        results = []
        for session in sessions:
            session_id = str(session["_id"])
            results.append(
                {
                    "id": session_id,
                    "_id": session_id,
                    "title": session.get("title"),
                    "description": session.get("description"),
                    "instructor": session.get("instructor"),
                    "startTime": session.get("startTime"),
                    "endTime": session.get("endTime"),
                    "status": session_status(session.get("startTime"), session.get("endTime"), now),
                    "participants": session.get("participants") or 0,
                    "maxParticipants": session.get("maxParticipants") or DEFAULT_MAX_PARTICIPANTS,
                    "category": session.get("category") or DEFAULT_CATEGORY,
                    "meetingLink": session.get("meetingLink") or "",
                    "recordingAvailable": session.get("recordingAvailable") or False,
                    "isBooked": session_id in booked,
                }
            )
        return results

    async def book(self, session_id: str, user: dict[str, Any]) -> dict[str, Any]:
        """
        Book a seat on a session for the caller.

        Returns:
            dict: message, sessionId, booking

        Raises:
            InvalidObjectIdError: If session_id is not an ObjectId
            LiveSessionNotFoundError: If the session does not exist
            ValidationError: If the session has started or is full
            ConflictError: If the caller already booked it
        """
        session_oid = require_object_id(session_id, INVALID_SESSION_ID)
        session = await live_session_crud.get_by_id(self.db, session_oid)
        if session is None:
            raise LiveSessionNotFoundError(session_id)

        now = utcnow()
        if has_started(session.get("startTime"), now):
            raise ValidationError("Cannot book a session that has already started")

        if await session_booking_crud.get_for_user(self.db, session_oid, user["uid"]):
            raise ConflictError("You have already booked this session", {"session_id": session_id})

        booked = await session_booking_crud.count_for_session(self.db, session_oid)
        if is_full(booked, session.get("maxParticipants")):
            raise ValidationError("Session is full", details={"session_id": session_id})

        booking = await session_booking_crud.create_if_absent(
            self.db,
            {
                "sessionId": session_oid,
                "userId": user["uid"],
                "userEmail": user.get("email"),
                "userName": user.get("name") or user.get("email"),
                "bookedAt": now,
                "remindersSent": [],
            },
        )
        if booking is None:
            raise ConflictError("You have already booked this session", {"session_id": session_id})

        await live_session_crud.adjust_participants(self.db, session_oid, 1)
        logger.info("Session booked", extra={"session_id": session_id, "uid": user["uid"]})
        return {
            "message": "Session booked successfully",
            "sessionId": session_id,
            "booking": serialize_document(booking),
        }

    async def cancel_booking(self, session_id: str, uid: str) -> dict[str, Any]:
        """
        Cancel the caller's booking.

        Raises:
            InvalidObjectIdError: If session_id is not an ObjectId
            BookingNotFoundError: If the caller holds no booking
        """
        session_oid = require_object_id(session_id, INVALID_SESSION_ID)
        if not await session_booking_crud.delete_for_user(self.db, session_oid, uid):
            raise BookingNotFoundError(session_id)

        await live_session_crud.adjust_participants(self.db, session_oid, -1)
        logger.info("Session booking cancelled", extra={"session_id": session_id, "uid": uid})
        return {"message": "Booking cancelled successfully", "sessionId": session_id}

    async def my_bookings(self, uid: str) -> list[dict[str, Any]]:
        bookings = await session_booking_crud.list_with_sessions(self.db, uid)
        return [
            {
                "bookingId": str(booking["_id"]),
                "bookedAt": booking.get("bookedAt"),
                "session": {
                    "id": str(booking["session"]["_id"]),
                    "title": booking["session"].get("title"),
                    "description": booking["session"].get("description"),
                    "instructor": booking["session"].get("instructor"),
                    "startTime": booking["session"].get("startTime"),
                    "endTime": booking["session"].get("endTime"),
                    "category": booking["session"].get("category"),
                    "meetingLink": booking["session"].get("meetingLink"),
                },
            }
            for booking in bookings
        ]

    async def create_session(self, fields: dict[str, Any], created_by: str | None) -> dict[str, Any]:
        """
        Create a session; unset optional fields take their defaults.

        Returns:
            dict: message, sessionId, session
        """
        session = await live_session_crud.create(
            self.db,
            {**SESSION_DEFAULTS, **fields, "participants": 0, "createdAt": utcnow(), "createdBy": created_by},
        )
        session = serialize_document(session)
        logger.info("Session created", extra={"session_id": session["_id"], "session_title": fields.get("title")})
        return {"message": "Session created successfully", "sessionId": session["_id"], "session": session}

    async def update_session(
        self, session_id: str, fields: dict[str, Any], updated_by: str | None
    ) -> dict[str, Any]:
        updated = await live_session_crud.update_by_identifier(
            self.db, session_id, {**fields, "updatedAt": utcnow(), "updatedBy": updated_by}
        )
        if updated is None:
            raise LiveSessionNotFoundError(session_id)
        logger.info("Session updated", extra={"session_id": session_id, "fields": sorted(fields)})
        return serialize_document(updated)

    async def delete_session(self, session_id: str) -> None:
        """
        Delete a session together with every booking on it.

        Raises:
            InvalidObjectIdError: If session_id is not an ObjectId
            LiveSessionNotFoundError: If the session does not exist
        """
        session_oid = require_object_id(session_id, INVALID_SESSION_ID)
        if not await live_session_crud.exists(self.db, session_oid):
            raise LiveSessionNotFoundError(session_id)

        removed = await session_booking_crud.delete_for_session(self.db, session_oid)
        await live_session_crud.delete_by_id(self.db, session_oid)
        logger.info("Session deleted", extra={"session_id": session_id, "bookings_removed": removed})
