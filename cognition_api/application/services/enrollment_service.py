"""
Enrollment service orchestrator.

Dependencies: cognition_api.boundary.db.CRUD
System role: Enrollment use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.enrollment_crud import enrollment_crud
from cognition_api.boundary.db.serialization import serialize_document
from cognition_api.core.exceptions import ConflictError, CourseNotFoundError, EnrollmentNotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Enrollment service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def list_enrollments(self, uid: str) -> list[dict[str, Any]]:
        """The user's enrollments, each with the full course (or None)."""
        enrollments = await enrollment_crud.list_for_user(self.db, uid)
        results = []
        for enrollment in enrollments:
            course = await course_crud.get_by_identifier(self.db, enrollment.get("courseId", ""))
            results.append(serialize_document({**enrollment, "course": course}))
        return results

    async def enroll(self, course_id: str, user: dict[str, Any]) -> dict[str, Any]:
        """
        Enroll the caller in a course.

        Returns:
            dict: message, enrollmentId, enrollment

        Raises:
            CourseNotFoundError: If the course does not exist
            ConflictError: If the user is already enrolled
        """
        course = await course_crud.get_by_identifier(self.db, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)

        if await enrollment_crud.get_for_user(self.db, user["uid"], course_id):
            raise ConflictError("User already enrolled in this course", {"course_id": course_id})

        now = utcnow()
        enrollment = await enrollment_crud.create(
            self.db,
            {
                "uid": user["uid"],
                "email": user.get("email"),
                "courseId": course_id,
                "courseName": course.get("title"),
                "enrolledAt": now,
                "progress": 0,
                "status": "active",
                "lastAccessedAt": now,
            },
        )
        logger.info("User enrolled", extra={"uid": user["uid"], "course_id": course_id})
        enrollment = serialize_document(enrollment)
        return {"message": "Enrolled successfully", "enrollmentId": enrollment["_id"], "enrollment": enrollment}

    async def unenroll(self, course_id: str, uid: str) -> None:
        if not await enrollment_crud.delete_for_user(self.db, uid, course_id):
            raise EnrollmentNotFoundError(details={"course_id": course_id})
        logger.info("User unenrolled", extra={"uid": uid, "course_id": course_id})

    async def enrollment_status(self, course_id: str, uid: str) -> dict[str, Any]:
        enrollment = await enrollment_crud.get_for_user(self.db, uid, course_id)
        return {"isEnrolled": enrollment is not None, "enrollment": serialize_document(enrollment)}
