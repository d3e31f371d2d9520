"""
Course image service.

Stores uploaded course images as documents, links them to courses, resolves
them for display and removes them again.

Replacement runs insert, then swap, then collect: the new image is stored,
the course reference is swapped atomically (the update returns the displaced
reference), and only the displaced image is deleted. Concurrent uploads for
the same course each delete exactly the image they replaced, so the course
ends on the last writer's image and nothing is orphaned.

Dependencies: cognition_api.boundary.db.CRUD, cognition_api.core.image_reference
System role: Course image use case orchestration
"""

import logging
import time
from typing import Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.image_crud import COURSE_IMAGE_TYPE, image_crud
from cognition_api.boundary.db.object_ids import require_object_id, to_object_id
from cognition_api.boundary.db.serialization import serialize_document
from cognition_api.core.exceptions import (
    ConflictError,
    CourseNotFoundError,
    ImageNotFoundError,
    ValidationError,
)
from cognition_api.core.image_reference import (
    MAX_IMAGE_BYTES,
    image_url_for,
    parse_image_data_url,
    to_data_url,
)
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


def resolve_embedded_image(course: dict[str, Any]) -> dict[str, Any]:
    """
    Serialize a course from the image aggregation.

    The joined imageData.data is normalised to a full data URL.
    """
    course = serialize_document(course)
    image_data = course.get("imageData")
    if isinstance(image_data, dict):
        image_data["data"] = to_data_url(image_data.get("data"), image_data.get("mimeType"))
    return course


class ImageService:
    """Course image upload, resolution and deletion."""

    def __init__(self, db: AsyncIOMotorDatabase, max_image_bytes: int = MAX_IMAGE_BYTES) -> None:
        """
        Initialize image service.

        Args:
            db: Async database handle
            max_image_bytes: Largest accepted decoded image size
        """
        self.db = db
        self.max_image_bytes = max_image_bytes

    async def upload_course_image(
        self,
        course_id: str,
        image: str | None,
        filename: str | None,
        uploaded_by: str | None,
    ) -> dict[str, str]:
        """
        Store an image and make it the course's current image.

        Args:
            course_id: External course_id or _id string
            image: Base64 image data URL
            filename: Optional original file name
            uploaded_by: uid of the admin uploading

        Returns:
            dict: message, imageId, imageUrl

        Raises:
            CourseNotFoundError: No course matches course_id
            InvalidImageError: image is not a base64 image data URL
            ImageTooLargeError: image exceeds the size limit
        """
        course = await course_crud.get_by_identifier(self.db, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)

        parsed = parse_image_data_url(image, self.max_image_bytes)

        stored = await image_crud.create(
            self.db,
            {
                "filename": filename or f"course_{course_id}_{int(time.time() * 1000)}.{parsed.subtype}",
                "mimeType": parsed.mime_type,
                "size": parsed.estimated_size,
                "data": parsed.data_url,
                "type": COURSE_IMAGE_TYPE,
                "courseId": course_id,
                "uploadedAt": utcnow(),
                "uploadedBy": uploaded_by,
            },
        )
        image_id = str(stored["_id"])
        image_url = image_url_for(image_id)

        previous = await course_crud.swap_image(
            self.db, course["_id"], image_id, image_url, uploaded_by
        )
        if previous is None:
            # Course deleted after the lookup; the new image has no owner
            await self._discard(stored["_id"], reason="course_deleted")
            raise CourseNotFoundError(course_id)

        displaced = to_object_id(previous.get("image"))
        if displaced is not None and displaced != stored["_id"]:
            await self._discard(displaced, reason="replaced")

        logger.info(
            "Course image uploaded",
            extra={"course_id": course_id, "image_id": image_id, "size": int(parsed.estimated_size)},
        )
        return {
            "message": "Course image uploaded successfully",
            "imageId": image_id,
            "imageUrl": image_url,
        }

    async def get_image(self, image_id: str) -> dict[str, Any]:
        """
        Resolve an image document for display.

        Returns:
            dict: id, data (full data URL), mimeType, filename, uploadedAt

        Raises:
            InvalidObjectIdError: image_id is not an ObjectId
            ImageNotFoundError: No image with that id
        """
        oid = require_object_id(image_id, "Invalid image ID")
        image = await image_crud.get_by_id(self.db, oid)
        if image is None:
            raise ImageNotFoundError(image_id)

        return {
            "id": str(image["_id"]),
            "data": to_data_url(image.get("data"), image.get("mimeType")),
            "mimeType": image.get("mimeType"),
            "filename": image.get("filename"),
            "uploadedAt": image.get("uploadedAt"),
        }

    async def delete_course_image(self, course_id: str, updated_by: str | None) -> dict[str, str]:
        """
        Detach and delete a course's image.

        The reference is only cleared if it still names the image that was
        read, so a concurrent upload is never undone.

        Raises:
            CourseNotFoundError: No course matches course_id
            ValidationError: The course has no image
            ConflictError: The image changed while deleting
        """
        course = await course_crud.get_by_identifier(self.db, course_id)
        if course is None:
            raise CourseNotFoundError(course_id)

        reference = course.get("image")
        if not reference:
            raise ValidationError("Course has no image", field="image")

        previous = await course_crud.clear_image(self.db, course["_id"], reference, updated_by)
        if previous is None:
            raise ConflictError(
                "Course image changed during deletion, please retry",
                {"course_id": course_id},
            )

        oid = to_object_id(reference)
        if oid is not None:
            await self._discard(oid, reason="deleted")

        logger.info("Course image deleted", extra={"course_id": course_id, "image_id": str(reference)})
        return {"message": "Course image deleted successfully", "imageId": str(reference)}

    async def _discard(self, image_id: ObjectId, reason: str) -> None:
        """Best-effort image deletion; failures are logged, never raised."""
        try:
            await image_crud.delete_by_id(self.db, image_id)
        except PyMongoError as e:
            logger.warning(
                "Failed to delete image",
                extra={"image_id": str(image_id), "reason": reason, "error": str(e)},
            )
