"""
Course service orchestrator.

Coordinates course lifecycle operations. Reads join each course to its
image document; deleting a course also removes the image it referenced.

Dependencies: cognition_api.boundary.db.CRUD
System role: Course use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cognition_api.application.services.image_service import resolve_embedded_image
from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.image_crud import image_crud
from cognition_api.boundary.db.serialization import serialize_document
from cognition_api.core.exceptions import CourseNotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


class CourseService:
    """Course service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        """
        Initialize course service with the async database handle.

        Args:
            db: Motor database
        """
        self.db = db

    async def list_courses(self) -> list[dict[str, Any]]:
        """
        Get every course with its image resolved.

        Returns:
            list[dict]: Courses with imageData when the reference resolves
        """
        courses = await course_crud.list_with_images(self.db)
        return [resolve_embedded_image(course) for course in courses]

    async def get_course(self, course_id: str) -> dict[str, Any]:
        """
        Get one course by course_id or _id, image resolved.

        Raises:
            CourseNotFoundError: If no course matches
        """
        course = await course_crud.get_with_image(self.db, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)
        return resolve_embedded_image(course)

    async def create_course(self, fields: dict[str, Any], created_by: str | None) -> dict[str, Any]:
        """
        Create new course.

        Args:
            fields: Course fields as sent by the client
            created_by: uid of the creating admin

        Returns:
            dict: Stored course document
        """
        course = await course_crud.create(
            self.db, {**fields, "createdAt": utcnow(), "createdBy": created_by}
        )
        logger.info(
            "Course created",
            extra={"course_id": str(course["_id"]), "course_title": fields.get("title")},
        )
        return serialize_document(course)

    async def update_course(
        self, course_id: str, fields: dict[str, Any], updated_by: str | None
    ) -> dict[str, Any]:
        """
        Update course fields.

        Raises:
            CourseNotFoundError: If no course matches
        """
        course = await course_crud.get_by_identifier(self.db, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)

        updated = await course_crud.update_by_id(
            self.db, course["_id"], {**fields, "updatedAt": utcnow(), "updatedBy": updated_by}
        )
        if updated is None:
            raise CourseNotFoundError(course_id)

        logger.info("Course updated", extra={"course_id": course_id, "fields": sorted(fields)})
        return serialize_document(updated)

    async def delete_course(self, course_id: str) -> None:
        """
        Delete a course and, best-effort, the image it referenced.

        Raises:
            CourseNotFoundError: If no course matches
        """
        deleted = await course_crud.delete_by_identifier(self.db, course_id)
        if deleted is None:
            raise CourseNotFoundError(course_id)

        try:
            await image_crud.delete_reference(self.db, deleted.get("image"))
        except PyMongoError as e:
            logger.warning(
                "Failed to delete image of deleted course",
                extra={"course_id": course_id, "error": str(e)},
            )

        logger.info("Course deleted", extra={"course_id": course_id})
