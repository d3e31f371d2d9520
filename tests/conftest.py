"""
Shared test fixtures and configuration for entire test suite.

Provides: test environment settings, app/client factories, mocked database,
authenticated caller overrides, sample documents
Dependencies: pytest, fastapi, bson
System role: Test infrastructure and fixture management
"""

import os

# Settings are cached on first use, so the environment must be set before
# any cognition_api import
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from cognition_api.api.deps.dependencies import get_current_user, require_admin
from cognition_api.api.main import create_app
from cognition_api.boundary.db.connection import get_database
from cognition_api.models.user import CurrentUser


@pytest.fixture
def mock_db() -> MagicMock:
    """Stand-in for AsyncIOMotorDatabase; services under test patch the CRUD layer."""
    return MagicMock()


@pytest.fixture
def app(mock_db):
    """FastAPI app wired to the mock database, without running the lifespan."""
    application = create_app()
    application.dependency_overrides[get_database] = lambda: mock_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def student() -> CurrentUser:
    return CurrentUser(uid="student-1", email="student@example.com", name="Sam Student")


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(uid="admin-1", email="admin@example.com", name="Ada Admin")


@pytest.fixture
def as_student(app, student):
    """Authenticate every request as a student."""
    app.dependency_overrides[get_current_user] = lambda: student
    return student


@pytest.fixture
def as_admin(app, admin):
    """Authenticate every request as an admin."""
    app.dependency_overrides[get_current_user] = lambda: admin
    app.dependency_overrides[require_admin] = lambda: admin
    return admin


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def course_oid() -> ObjectId:
    return ObjectId()


@pytest.fixture
def sample_course(course_oid) -> dict:
    """Course document with two modules of lessons."""
    return {
        "_id": course_oid,
        "course_id": "CB-101",
        "title": "Intro to Berries",
        "description": "Everything about berries",
        "price": 150.0,
        "modules": [
            {
                "id": "m1",
                "title": "Basics",
                "lessons": [{"id": "l1", "title": "What is a berry"}, {"id": "l2", "title": "Types"}],
            },
            {
                "id": "m2",
                "title": "Advanced",
                "lessons": [{"id": "l3", "title": "Cultivation"}],
            },
        ],
    }


PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture
def png_data_url() -> str:
    return PNG_DATA_URL
