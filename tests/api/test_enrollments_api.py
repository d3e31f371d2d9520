"""
Test suite for enrollment endpoints.

System role: Verification of enrollment HTTP API
"""

from unittest.mock import AsyncMock, patch

from bson import ObjectId

from cognition_api.boundary.db.CRUD.course_crud import course_crud
from cognition_api.boundary.db.CRUD.enrollment_crud import enrollment_crud


def test_enroll_creates_enrollment(client, as_student, sample_course) -> None:
    # Arrange
    enrollment_oid = ObjectId()
    create = AsyncMock(side_effect=lambda db, doc: {**doc, "_id": enrollment_oid})

    # Act
    with patch.object(course_crud, "get_by_identifier", AsyncMock(return_value=sample_course)), \
         patch.object(enrollment_crud, "get_for_user", AsyncMock(return_value=None)), \
         patch.object(enrollment_crud, "create", create):
        response = client.post("/enroll/CB-101")

    # Assert
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Enrolled successfully"
    assert body["enrollmentId"] == str(enrollment_oid)
    assert body["enrollment"]["progress"] == 0
    assert body["enrollment"]["courseName"] == sample_course["title"]


def test_enrolling_twice_is_400(client, as_student, sample_course) -> None:
    with patch.object(course_crud, "get_by_identifier", AsyncMock(return_value=sample_course)), \
         patch.object(enrollment_crud, "get_for_user", AsyncMock(return_value={"uid": as_student.uid})), \
         patch.object(enrollment_crud, "create", AsyncMock()) as create:
        response = client.post("/enroll/CB-101")

    assert response.status_code == 400
    assert response.json() == {"error": "User already enrolled in this course"}
    create.assert_not_awaited()


def test_enroll_in_missing_course_is_404(client, as_student) -> None:
    with patch.object(course_crud, "get_by_identifier", AsyncMock(return_value=None)):
        response = client.post("/enroll/CB-999")

    assert response.status_code == 404


def test_unenroll_without_enrollment_is_404(client, as_student) -> None:
    with patch.object(enrollment_crud, "delete_for_user", AsyncMock(return_value=False)):
        response = client.delete("/enroll/CB-101")

    assert response.status_code == 404
    assert response.json() == {"error": "Enrollment not found"}


def test_enrollment_status(client, as_student) -> None:
    with patch.object(enrollment_crud, "get_for_user", AsyncMock(return_value=None)):
        response = client.get("/enroll/CB-101")

    assert response.json() == {"isEnrolled": False, "enrollment": None}
