"""
Course progress calculations.

Lessons live inside course["modules"][i]["lessons"]; completion is tracked
as a list of lesson ids.

Dependencies: None
System role: Progress tracking rules
"""

import math
from typing import Any

AUTO_COMPLETE_RATIO = 0.9


def iter_lessons(course: dict[str, Any] | None):
    """Yield every lesson in module order, annotated with its module."""
    if not course:
        return
    for module in course.get("modules") or []:
        for lesson in module.get("lessons") or []:
            yield {**lesson, "moduleId": module.get("id"), "moduleTitle": module.get("title")}


def count_lessons(course: dict[str, Any] | None) -> int:
    return sum(1 for _ in iter_lessons(course))


def percent_complete(course: dict[str, Any] | None, completed_lessons: list[str]) -> int:
    """Rounded completion percentage; 0 for a course without lessons."""
    total = count_lessons(course)
    if total == 0:
        return 0
    # Half-up rounding, so 12.5 reports as 13
    return math.floor(len(completed_lessons) / total * 100 + 0.5)


def next_lesson(course: dict[str, Any] | None, completed_lessons: list[str]) -> dict[str, Any] | None:
    """First lesson not yet completed, or None when everything is done."""
    done = set(completed_lessons)
    for lesson in iter_lessons(course):
        if lesson.get("id") not in done:
            return lesson
    return None


def should_auto_complete(position: float, duration: float | None) -> bool:
    """A video counts as watched once more than 90% has played."""
    if not duration:
        return False
    return position / duration > AUTO_COMPLETE_RATIO
