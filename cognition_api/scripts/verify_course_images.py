"""
Report the state of every course's image reference.

Usage:
    python -m cognition_api.scripts.verify_course_images
"""

import logging
import sys
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.image_crud import image_crud
from cognition_api.boundary.db.object_ids import to_object_id

from ._runner import run_with_database

logger = logging.getLogger(__name__)

RESOLVED = "resolved"
BROKEN = "broken"
LEGACY = "legacy"
MISSING = "missing"


async def classify_course_image(db: AsyncIOMotorDatabase, course: dict[str, Any]) -> str:
    """
    Classify a course's image reference.

    Returns:
        str: resolved (points at a stored image), broken (ObjectId with no
        image), legacy (path string) or missing (no image)
    """
    reference = course.get("image")
    if not reference:
        return MISSING
    oid = to_object_id(reference)
    if oid is None:
        return LEGACY
    return RESOLVED if await image_crud.exists(db, oid) else BROKEN


async def verify_course_images(db: AsyncIOMotorDatabase) -> dict[str, list[str]]:
    """Group course identifiers by the state of their image reference."""
    report: dict[str, list[str]] = {RESOLVED: [], BROKEN: [], LEGACY: [], MISSING: []}
    for course in await course_crud.find_many(db):
        state = await classify_course_image(db, course)
        course_id = str(course.get("course_id") or course["_id"])
        report[state].append(course_id)
        if state in (BROKEN, LEGACY):
            logger.warning(
                "Course image needs attention",
                extra={"course_id": course_id, "state": state, "reference": str(course.get("image"))},
            )
    return report


def main() -> int:
    report = run_with_database(verify_course_images)
    logger.info(
        "Course image verification finished",
        extra={state: len(course_ids) for state, course_ids in report.items()},
    )
    return 1 if report[BROKEN] else 0


if __name__ == "__main__":
    sys.exit(main())
