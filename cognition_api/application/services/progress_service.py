"""
Lesson progress service.

Tracks completed lessons, video positions and quiz scores per user and
course, and mirrors the completion percentage onto the enrollment.

Dependencies: cognition_api.boundary.db.CRUD, cognition_api.core.progress
System role: Learning progress use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.enrollment_crud import enrollment_crud
from cognition_api.boundary.db.CRUD.progress_crud import initial_progress, progress_crud
from cognition_api.boundary.db.CRUD.user_crud import user_crud
from cognition_api.boundary.db.serialization import serialize_document, serialize_documents
from cognition_api.core.exceptions import AuthorizationError, NotFoundError
from cognition_api.core.progress import next_lesson, percent_complete, should_auto_complete
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)

NOT_ENROLLED = "User not enrolled in this course"


class ProgressService:
    """Lesson progress orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def _require_enrollment(self, uid: str, course_id: str) -> None:
        if await enrollment_crud.get_for_user(self.db, uid, course_id) is None:
            raise AuthorizationError(NOT_ENROLLED, {"uid": uid, "course_id": course_id})

    async def _course(self, course_id: str) -> dict[str, Any] | None:
        return await course_crud.get_by_identifier(self.db, course_id)

    async def get_progress(self, caller_uid: str, user_id: str, course_id: str) -> dict[str, Any]:
        """
        Get (creating if needed) a user's progress in a course.

        Users read their own progress; admins may read anyone's.

        Returns:
            dict: Progress record plus nextLesson

        Raises:
            AuthorizationError: Caller is neither the user nor an admin
            NotFoundError: The user is not enrolled
        """
        if caller_uid != user_id:
            caller = await user_crud.get_by_uid(self.db, caller_uid)
            if not caller or caller.get("role") != "admin":
                raise AuthorizationError("Access denied", {"uid": caller_uid})

        if await enrollment_crud.get_for_user(self.db, user_id, course_id) is None:
            raise NotFoundError(NOT_ENROLLED, {"uid": user_id, "course_id": course_id})

        progress = await progress_crud.get_for_user(self.db, user_id, course_id)
        if progress is None:
            progress = await progress_crud.create(self.db, initial_progress(user_id, course_id))

        course = await self._course(course_id)
        return serialize_document(
            {**progress, "nextLesson": next_lesson(course, progress.get("completedLessons") or [])}
        )

    async def update_progress(self, uid: str, course_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a bulk progress update.

        Only the keys present in changes are written. Sending completedLessons
        recomputes percentComplete.
        """
        await self._require_enrollment(uid, course_id)

        updates = dict(changes)
        percent = None
        if updates.get("completedLessons") is not None:
            percent = percent_complete(await self._course(course_id), updates["completedLessons"])
            updates["percentComplete"] = percent

        progress = await progress_crud.upsert(self.db, uid, course_id, updates)
        await enrollment_crud.set_progress(self.db, uid, course_id, percent)
        return {"message": "Progress updated successfully", "progress": serialize_document(progress)}

    async def autosave_video(
        self,
        uid: str,
        course_id: str,
        lesson_id: str,
        position: float,
        duration: float | None = None,
    ) -> dict[str, Any]:
        """
        Record the playback position of a lesson video.

        The lesson is completed automatically once more than 90% of the
        video has played.

        Returns:
            dict: message, position, autoCompleted
        """
        await self._require_enrollment(uid, course_id)

        existing = await progress_crud.get_for_user(self.db, uid, course_id)
        attempt = ((existing or {}).get("lessonAttempts") or {}).get(lesson_id) or {}
        now = utcnow()

        updates: dict[str, Any] = {
            f"videoPositions.{lesson_id}": position,
            f"lessonAttempts.{lesson_id}.lastVisitedAt": now,
            "lastOpenedLesson": lesson_id,
        }
        if not attempt.get("firstOpenedAt"):
            updates[f"lessonAttempts.{lesson_id}.firstOpenedAt"] = now

        progress = await progress_crud.upsert(
            self.db,
            uid,
            course_id,
            updates,
            on_insert={"completedLessons": [], "quizScores": {}, "percentComplete": 0},
        )

        auto_completed = False
        completed = (progress or {}).get("completedLessons") or []
        if should_auto_complete(position, duration) and lesson_id not in completed:
            completed = [*completed, lesson_id]
            percent = percent_complete(await self._course(course_id), completed)
            await progress_crud.upsert(
                self.db, uid, course_id, {"completedLessons": completed, "percentComplete": percent}
            )
            await enrollment_crud.set_progress(self.db, uid, course_id, percent)
            auto_completed = True
            logger.info(
                "Lesson auto-completed from video",
                extra={"uid": uid, "course_id": course_id, "lesson_id": lesson_id},
            )

        return {"message": "Video position saved", "position": position, "autoCompleted": auto_completed}

    async def complete_lesson(
        self, uid: str, course_id: str, lesson_id: str, quiz_score: Any = None
    ) -> dict[str, Any]:
        """
        Mark a lesson complete, optionally recording its quiz score.

        Completing a lesson twice is a no-op for the completed list.

        Returns:
            dict: message, percentComplete, nextLesson, totalCompleted
        """
        await self._require_enrollment(uid, course_id)

        existing = await progress_crud.get_for_user(self.db, uid, course_id)
        completed = list((existing or {}).get("completedLessons") or [])
        if lesson_id not in completed:
            completed.append(lesson_id)

        course = await self._course(course_id)
        percent = percent_complete(course, completed)

        updates: dict[str, Any] = {"completedLessons": completed, "percentComplete": percent}
        if quiz_score is not None:
            updates[f"quizScores.{lesson_id}"] = quiz_score

        await progress_crud.upsert(
            self.db,
            uid,
            course_id,
            updates,
            on_insert={"videoPositions": {}, "lessonAttempts": {}},
        )
        await enrollment_crud.set_progress(self.db, uid, course_id, percent)

        return {
            "message": "Lesson completed successfully",
            "percentComplete": percent,
            "nextLesson": serialize_document(next_lesson(course, completed)),
            "totalCompleted": len(completed),
        }

    async def reset_progress(self, uid: str, course_id: str) -> dict[str, Any]:
        await self._require_enrollment(uid, course_id)
        record = await progress_crud.reset(self.db, uid, course_id)
        await enrollment_crud.set_progress(self.db, uid, course_id, 0, touch=False)
        return {"message": "Progress reset successfully", "progress": record}

    async def all_progress(self, uid: str) -> list[dict[str, Any]]:
        """Every progress record of the user with the course title and description."""
        records = await progress_crud.list_for_user(self.db, uid)
        results = []
        for record in records:
            course = await self._course(record.get("courseId", "")) or {}
            results.append(
                {
                    **record,
                    "courseTitle": course.get("title") or "Unknown Course",
                    "courseDescription": course.get("description") or "",
                }
            )
        return serialize_documents(results)

    async def admin_get_progress(self, user_id: str, course_id: str) -> dict[str, Any]:
        progress = await progress_crud.get_for_user(self.db, user_id, course_id)
        if progress is None:
            raise NotFoundError("Progress record not found", {"uid": user_id, "course_id": course_id})
        return serialize_document(progress)

    async def admin_reset_progress(self, user_id: str, course_id: str) -> dict[str, Any]:
        await progress_crud.reset(self.db, user_id, course_id)
        await enrollment_crud.set_progress(self.db, user_id, course_id, 0, touch=False)
        logger.info("Progress reset by admin", extra={"uid": user_id, "course_id": course_id})
        return {"message": "User progress reset successfully", "userId": user_id, "courseId": course_id}
