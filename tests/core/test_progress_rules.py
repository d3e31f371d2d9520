"""
Test suite for course progress calculations.

System role: Verification of lesson completion rules
"""

import pytest

from cognition_api.core.progress import (
    count_lessons,
    next_lesson,
    percent_complete,
    should_auto_complete,
)


class TestPercentComplete:
    def test_counts_lessons_across_all_modules(self, sample_course: dict) -> None:
        assert count_lessons(sample_course) == 3
        assert percent_complete(sample_course, ["l1"]) == 33
        assert percent_complete(sample_course, ["l1", "l2"]) == 67
        assert percent_complete(sample_course, ["l1", "l2", "l3"]) == 100

    def test_half_rounds_up(self) -> None:
        course = {"modules": [{"id": "m", "lessons": [{"id": str(i)} for i in range(8)]}]}

        assert percent_complete(course, ["0"]) == 13

    @pytest.mark.parametrize("course", [None, {}, {"modules": []}, {"modules": [{"lessons": []}]}])
    def test_missing_course_or_lessons_gives_zero(self, course) -> None:
        assert percent_complete(course, ["l1"]) == 0


class TestNextLesson:
    def test_first_incomplete_lesson_in_module_order(self, sample_course: dict) -> None:
        lesson = next_lesson(sample_course, ["l1", "l2"])

        assert lesson["id"] == "l3"
        assert lesson["moduleId"] == "m2"
        assert lesson["moduleTitle"] == "Advanced"

    def test_none_when_all_complete(self, sample_course: dict) -> None:
        assert next_lesson(sample_course, ["l1", "l2", "l3"]) is None


@pytest.mark.parametrize(
    "position,duration,expected",
    [(91, 100, True), (90, 100, False), (10, None, False), (10, 0, False)],
)
def test_should_auto_complete(position, duration, expected) -> None:
    assert should_auto_complete(position, duration) is expected
