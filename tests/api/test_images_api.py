"""
Test suite for the image resolver endpoint.

Runs the real ImageService with the image CRUD patched.

System role: Verification of GET /api/images/{id}
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from bson import ObjectId

from cognition_api.boundary.db.CRUD.image_crud import image_crud


def test_invalid_object_id_is_400(client) -> None:
    response = client.get("/api/images/not-an-id")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid image ID"}


def test_missing_image_is_404(client) -> None:
    with patch.object(image_crud, "get_by_id", AsyncMock(return_value=None)):
        response = client.get(f"/api/images/{ObjectId()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Image not found"}


def test_stored_image_is_returned_as_data_url(client) -> None:
    # Arrange
    oid = ObjectId()
    document = {
        "_id": oid,
        "data": "aGVsbG8=",
        "mimeType": "image/webp",
        "filename": "cover.webp",
        "uploadedAt": datetime(2024, 5, 1, tzinfo=timezone.utc),
    }

    # Act
    with patch.object(image_crud, "get_by_id", AsyncMock(return_value=document)):
        response = client.get(f"/api/images/{oid}")

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == str(oid)
    assert body["data"] == "data:image/webp;base64,aGVsbG8="
    assert body["mimeType"] == "image/webp"
    assert body["uploadedAt"].startswith("2024-05-01")
