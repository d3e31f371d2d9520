"""
Move legacy course image paths into the images collection.

Older courses store ``image`` as a file path. For each of them the file is
looked up locally, stored as an image document, and the course is pointed
at it. The old path is kept in ``legacyImagePath``; when no file is found
the image document keeps only the path in ``url``.

Usage:
    python -m cognition_api.scripts.migrate_image_paths
"""

import base64
import logging
import sys
from pathlib import Path, PurePosixPath
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.image_crud import COURSE_IMAGE_TYPE, image_crud
from cognition_api.boundary.db.object_ids import to_object_id
from cognition_api.core.image_reference import image_url_for, mime_type_for_path
from cognition_api.core.timestamps import utcnow

from ._runner import run_with_database

logger = logging.getLogger(__name__)

LEGACY_SOURCE = "legacy_path"


def candidate_paths(legacy_path: str, root: Path) -> list[Path]:
    """Places a legacy path may point at, in lookup order."""
    relative = legacy_path.lstrip("/")
    return [
        root / relative,
        root / "uploads" / PurePosixPath(legacy_path).name,
        root / "public" / relative,
    ]


def read_legacy_file(legacy_path: str, root: Path) -> bytes | None:
    for path in candidate_paths(legacy_path, root):
        if path.is_file():
            return path.read_bytes()
    return None


def legacy_image_document(course: dict[str, Any], legacy_path: str, content: bytes | None) -> dict[str, Any]:
    mime_type = mime_type_for_path(legacy_path)
    data = None
    if content is not None:
        data = f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"
    return {
        "filename": PurePosixPath(legacy_path).name,
        "mimeType": mime_type,
        "size": len(content) if content is not None else 0,
        "data": data,
        "url": legacy_path,
        "type": COURSE_IMAGE_TYPE,
        "courseId": str(course["_id"]),
        "migratedAt": utcnow(),
        "migratedFrom": LEGACY_SOURCE,
    }


async def migrate_course_images(db: AsyncIOMotorDatabase, root: Path) -> dict[str, int]:
    """
    Migrate every course whose image is a path string.

    Args:
        db: Database handle
        root: Directory legacy paths are resolved against

    Returns:
        dict: migrated, skipped, missingFile and errors counts
    """
    summary = {"migrated": 0, "skipped": 0, "missingFile": 0, "errors": 0}
    courses = await course_crud.find_many(db, {"image": {"$exists": True, "$nin": [None, ""]}})

    for course in courses:
        legacy_path = course["image"]
        if not isinstance(legacy_path, str) or to_object_id(legacy_path) is not None:
            summary["skipped"] += 1
            continue

        content = read_legacy_file(legacy_path, root)
        if content is None:
            logger.warning(
                "Legacy image file not found, storing path only",
                extra={"course_id": str(course["_id"]), "legacy_path": legacy_path},
            )
            summary["missingFile"] += 1

        try:
            stored = await image_crud.create(db, legacy_image_document(course, legacy_path, content))
            image_id = str(stored["_id"])
            await course_crud.update_by_id(
                db,
                course["_id"],
                {
                    "image": image_id,
                    "imageUrl": image_url_for(image_id),
                    "imageType": "base64",
                    "legacyImagePath": legacy_path,
                    "migratedAt": utcnow(),
                },
            )
        except PyMongoError as e:
            logger.error(
                "Failed to migrate course image",
                extra={"course_id": str(course["_id"]), "error": str(e)},
            )
            summary["errors"] += 1
            continue

        logger.info(
            "Migrated course image",
            extra={"course_id": str(course["_id"]), "image_id": image_id},
        )
        summary["migrated"] += 1

    return summary


def main() -> int:
    summary = run_with_database(lambda db: migrate_course_images(db, Path.cwd()))
    logger.info("Image migration finished", extra=summary)
    return 1 if summary["errors"] else 0


if __name__ == "__main__":
    sys.exit(main())
