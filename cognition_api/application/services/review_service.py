"""
Review service orchestrator.

Dependencies: cognition_api.boundary.db.CRUD
System role: Course review use case orchestration
"""

import logging
import random
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.review_crud import review_crud
from cognition_api.core.exceptions import NotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)


def new_review_id() -> str:
    return f"REV-{random.randrange(100000)}"


class ReviewService:
    """Review service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def list_all(self) -> list[dict[str, Any]]:
        """Every review, flattened with its courseId and courseName."""
        documents = await review_crud.find_many(self.db)
        return [
            {"courseId": document.get("courseId"), "courseName": document.get("courseName"), **review}
            for document in documents
            for review in document.get("reviews") or []
        ]

    async def list_for_course(self, course_id: str) -> list[dict[str, Any]]:
        document = await review_crud.get_for_course(self.db, course_id)
        if document is None:
            raise NotFoundError("Course not found", {"course_id": course_id})
        return document.get("reviews") or []

    async def add_review(
        self, course_id: str, fields: dict[str, Any], user: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Append a review to a course.

        Raises:
            NotFoundError: If the course has no review document
        """
        review = {
            "reviewId": new_review_id(),
            "studentName": fields.get("studentName") or user.get("name") or "Anonymous",
            "rating": fields["rating"],
            "date": utcnow().date().isoformat(),
            "title": fields["title"],
            "review": fields["review"],
            "helpful": 0,
            "verified": True,
            "uid": user["uid"],
            "userEmail": user.get("email"),
        }
        if not await review_crud.push_review(self.db, course_id, review):
            raise NotFoundError("Course not found", {"course_id": course_id})
        logger.info("Review added", extra={"course_id": course_id, "review_id": review["reviewId"]})
        return review

    async def update_review(
        self, course_id: str, review_id: str, uid: str, fields: dict[str, Any]
    ) -> None:
        # Identity fields stay with the original author
        fields = {
            name: value
            for name, value in fields.items()
            if name not in ("reviewId", "uid", "userEmail", "verified")
        }
        fields["updatedAt"] = utcnow()
        if not await review_crud.set_review_fields(self.db, course_id, review_id, uid, fields):
            raise NotFoundError("Review not found or not owned by user", {"review_id": review_id})

    async def delete_review(self, course_id: str, review_id: str, uid: str) -> None:
        if not await review_crud.pull_review(self.db, course_id, review_id, uid):
            raise NotFoundError("Review not found or not owned by user", {"review_id": review_id})
