"""
Test suite for the image maintenance and admin seeding scripts.

Script bodies are exercised directly against patched CRUD singletons; no
database connection is opened.

System role: Verification of operational scripts
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.image_crud import image_crud
from cognition_api.core.image_reference import image_url_for
from cognition_api.scripts import seed_admin
from cognition_api.scripts.migrate_image_paths import (
    candidate_paths,
    legacy_image_document,
    migrate_course_images,
)
from cognition_api.scripts.verify_course_images import classify_course_image, verify_course_images


class TestMigrateCourseImages:
    @pytest.mark.asyncio
    async def test_migrates_path_with_local_file(self, tmp_path) -> None:
        # Arrange
        (tmp_path / "uploads").mkdir()
        (tmp_path / "uploads" / "intro.png").write_bytes(b"\x89PNG")
        course = {"_id": ObjectId(), "image": "/images/intro.png"}
        image_oid = ObjectId()
        create = AsyncMock(side_effect=lambda db, doc: {**doc, "_id": image_oid})

        # Act
        with patch.object(course_crud, "find_many", AsyncMock(return_value=[course])), \
             patch.object(image_crud, "create", create), \
             patch.object(course_crud, "update_by_id", AsyncMock()) as update_by_id:
            summary = await migrate_course_images(MagicMock(), tmp_path)

        # Assert
        assert summary == {"migrated": 1, "skipped": 0, "missingFile": 0, "errors": 0}
        stored = create.await_args.args[1]
        assert stored["data"].startswith("data:image/png;base64,")
        assert stored["migratedFrom"] == "legacy_path"
        fields = update_by_id.await_args.args[2]
        assert fields["image"] == str(image_oid)
        assert fields["imageUrl"] == image_url_for(str(image_oid))
        assert fields["legacyImagePath"] == "/images/intro.png"

    @pytest.mark.asyncio
    async def test_missing_file_keeps_path_only(self, tmp_path) -> None:
        course = {"_id": ObjectId(), "image": "img/gone.jpg"}
        create = AsyncMock(side_effect=lambda db, doc: {**doc, "_id": ObjectId()})

        with patch.object(course_crud, "find_many", AsyncMock(return_value=[course])), \
             patch.object(image_crud, "create", create), \
             patch.object(course_crud, "update_by_id", AsyncMock()):
            summary = await migrate_course_images(MagicMock(), tmp_path)

        assert summary["missingFile"] == 1
        assert summary["migrated"] == 1
        stored = create.await_args.args[1]
        assert stored["data"] is None
        assert stored["url"] == "img/gone.jpg"

    @pytest.mark.asyncio
    async def test_skips_object_id_references_and_counts_errors(self, tmp_path) -> None:
        courses = [
            {"_id": ObjectId(), "image": str(ObjectId())},
            {"_id": ObjectId(), "image": "a.png"},
        ]

        with patch.object(course_crud, "find_many", AsyncMock(return_value=courses)), \
             patch.object(image_crud, "create", AsyncMock(side_effect=PyMongoError("down"))):
            summary = await migrate_course_images(MagicMock(), tmp_path)

        assert summary == {"migrated": 0, "skipped": 1, "missingFile": 1, "errors": 1}


def test_candidate_paths_order(tmp_path) -> None:
    paths = candidate_paths("/static/img/a.png", tmp_path)

    assert paths == [
        tmp_path / "static/img/a.png",
        tmp_path / "uploads" / "a.png",
        tmp_path / "public" / "static/img/a.png",
    ]


def test_legacy_document_defaults_to_jpeg() -> None:
    document = legacy_image_document({"_id": "c1"}, "photo", b"abc")

    assert document["mimeType"] == "image/jpeg"
    assert document["size"] == 3
    assert document["courseId"] == "c1"


class TestVerifyCourseImages:
    @pytest.mark.asyncio
    async def test_classifies_each_reference(self) -> None:
        # Arrange
        present, dangling = ObjectId(), ObjectId()
        courses = [
            {"_id": ObjectId(), "course_id": "ok", "image": str(present)},
            {"_id": ObjectId(), "course_id": "dangling", "image": str(dangling)},
            {"_id": ObjectId(), "course_id": "old", "image": "/img/x.png"},
            {"_id": ObjectId(), "course_id": "none"},
        ]

        async def exists(db, oid):
            return oid == present

        # Act
        with patch.object(course_crud, "find_many", AsyncMock(return_value=courses)), \
             patch.object(image_crud, "exists", AsyncMock(side_effect=exists)):
            report = await verify_course_images(MagicMock())

        # Assert
        assert report == {
            "resolved": ["ok"],
            "broken": ["dangling"],
            "legacy": ["old"],
            "missing": ["none"],
        }

    @pytest.mark.asyncio
    async def test_empty_string_is_missing(self) -> None:
        assert await classify_course_image(MagicMock(), {"image": ""}) == "missing"


def test_seed_admin_requires_uid_and_email(capsys) -> None:
    assert seed_admin.main(["only-uid"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_seed_admin_promotes_user() -> None:
    with patch.object(seed_admin, "run_with_database", return_value={"uid": "u1", "email": "a@b.co"}) as run:
        assert seed_admin.main(["u1", "a@b.co"]) == 0

    run.assert_called_once()
