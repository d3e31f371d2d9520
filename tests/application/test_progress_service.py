"""
Test suite for ProgressService.

System role: Verification of lesson progress orchestration
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cognition_api.application.services.progress_service import NOT_ENROLLED, ProgressService
from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.enrollment_crud import enrollment_crud
from cognition_api.boundary.db.CRUD.progress_crud import progress_crud
from cognition_api.boundary.db.CRUD.user_crud import user_crud
from cognition_api.core.exceptions import AuthorizationError, NotFoundError


@pytest.fixture
def progress_service() -> ProgressService:
    return ProgressService(db=MagicMock())


@pytest.fixture
def enrolled(sample_course):
    """Patch CRUD so the student is enrolled in sample_course."""
    with patch.object(enrollment_crud, "get_for_user", AsyncMock(return_value={"uid": "student-1"})) as get_enrollment, \
         patch.object(enrollment_crud, "set_progress", AsyncMock()) as set_progress, \
         patch.object(course_crud, "get_by_identifier", AsyncMock(return_value=sample_course)), \
         patch.object(progress_crud, "get_for_user", AsyncMock(return_value=None)) as get_progress, \
         patch.object(progress_crud, "upsert", AsyncMock(side_effect=lambda db, uid, cid, fields, on_insert=None: dict(fields))) as upsert:
        yield {
            "get_enrollment": get_enrollment,
            "set_progress": set_progress,
            "get_progress": get_progress,
            "upsert": upsert,
        }


class TestCompleteLesson:
    @pytest.mark.asyncio
    async def test_completion_updates_percent_and_next_lesson(self, progress_service, enrolled) -> None:
        # Arrange
        enrolled["get_progress"].return_value = {"completedLessons": ["l1"]}

        # Act
        result = await progress_service.complete_lesson("student-1", "CB-101", "l2", quiz_score=80)

        # Assert
        assert result["percentComplete"] == 67
        assert result["totalCompleted"] == 2
        assert result["nextLesson"]["id"] == "l3"
        fields = enrolled["upsert"].await_args.args[3]
        assert fields["completedLessons"] == ["l1", "l2"]
        assert fields["quizScores.l2"] == 80
        enrolled["set_progress"].assert_awaited_once_with(progress_service.db, "student-1", "CB-101", 67)

    @pytest.mark.asyncio
    async def test_completing_twice_is_idempotent(self, progress_service, enrolled) -> None:
        enrolled["get_progress"].return_value = {"completedLessons": ["l1"]}

        result = await progress_service.complete_lesson("student-1", "CB-101", "l1")

        assert result["totalCompleted"] == 1
        assert enrolled["upsert"].await_args.args[3]["completedLessons"] == ["l1"]

    @pytest.mark.asyncio
    async def test_not_enrolled_is_forbidden(self, progress_service, enrolled) -> None:
        enrolled["get_enrollment"].return_value = None

        with pytest.raises(AuthorizationError) as exc_info:
            await progress_service.complete_lesson("student-1", "CB-101", "l1")

        assert exc_info.value.message == NOT_ENROLLED
        enrolled["upsert"].assert_not_awaited()


class TestUpdateProgress:
    @pytest.mark.asyncio
    async def test_completed_lessons_recompute_percent(self, progress_service, enrolled) -> None:
        await progress_service.update_progress("student-1", "CB-101", {"completedLessons": ["l1", "l2", "l3"]})

        assert enrolled["upsert"].await_args.args[3]["percentComplete"] == 100
        enrolled["set_progress"].assert_awaited_once_with(progress_service.db, "student-1", "CB-101", 100)

    @pytest.mark.asyncio
    async def test_other_fields_leave_percent_alone(self, progress_service, enrolled) -> None:
        await progress_service.update_progress("student-1", "CB-101", {"lastOpenedLesson": "l2"})

        assert "percentComplete" not in enrolled["upsert"].await_args.args[3]
        enrolled["set_progress"].assert_awaited_once_with(progress_service.db, "student-1", "CB-101", None)


class TestAutosaveVideo:
    @pytest.mark.asyncio
    async def test_past_ninety_percent_auto_completes(self, progress_service, enrolled) -> None:
        result = await progress_service.autosave_video("student-1", "CB-101", "l1", 95, 100)

        assert result["autoCompleted"] is True
        last_fields = enrolled["upsert"].await_args.args[3]
        assert last_fields == {"completedLessons": ["l1"], "percentComplete": 33}

    @pytest.mark.asyncio
    async def test_position_is_saved_with_attempt_timestamps(self, progress_service, enrolled) -> None:
        result = await progress_service.autosave_video("student-1", "CB-101", "l1", 30, 100)

        assert result == {"message": "Video position saved", "position": 30, "autoCompleted": False}
        fields = enrolled["upsert"].await_args.args[3]
        assert fields["videoPositions.l1"] == 30
        assert "lessonAttempts.l1.firstOpenedAt" in fields
        assert "lessonAttempts.l1.lastVisitedAt" in fields


class TestGetProgress:
    @pytest.mark.asyncio
    async def test_other_users_progress_requires_admin(self, progress_service) -> None:
        with patch.object(user_crud, "get_by_uid", AsyncMock(return_value={"role": "student"})):
            with pytest.raises(AuthorizationError):
                await progress_service.get_progress("student-1", "someone-else", "CB-101")

    @pytest.mark.asyncio
    async def test_missing_enrollment_is_not_found(self, progress_service, enrolled) -> None:
        enrolled["get_enrollment"].return_value = None

        with pytest.raises(NotFoundError):
            await progress_service.get_progress("student-1", "student-1", "CB-101")

    @pytest.mark.asyncio
    async def test_first_read_creates_initial_record(self, progress_service, enrolled) -> None:
        with patch.object(progress_crud, "create", AsyncMock(side_effect=lambda db, doc: doc)) as create:
            result = await progress_service.get_progress("student-1", "student-1", "CB-101")

        create.assert_awaited_once()
        assert result["completedLessons"] == []
        assert result["percentComplete"] == 0
        assert result["nextLesson"]["id"] == "l1"
