"""
Test suite for application startup and shutdown.

MongoDatabase.connect is patched, so no server is contacted.

System role: Verification of the database startup contract
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from pymongo.errors import ServerSelectionTimeoutError

from cognition_api.api.main import lifespan
from cognition_api.boundary.db.connection import MongoDatabase
from cognition_api.configs.server import ServerSettings
from cognition_api.configs.settings import Settings


def settings_for(environment: str, tmp_path) -> Settings:
    return Settings(environment=environment, server=ServerSettings(uploads_dir=str(tmp_path / "uploads")))


class TestUnreachableDatabase:
    @pytest.mark.asyncio
    async def test_exits_the_process_outside_test_environment(self, tmp_path) -> None:
        # Arrange
        failure = ServerSelectionTimeoutError("no servers")

        # Act
        with patch("cognition_api.api.main.get_settings", return_value=settings_for("production", tmp_path)), \
             patch.object(MongoDatabase, "connect", AsyncMock(side_effect=failure)):
            with pytest.raises(SystemExit) as exc_info:
                async with lifespan(FastAPI()):
                    pass

        # Assert
        assert exc_info.value.code == 1
        assert exc_info.value.__cause__ is failure

    @pytest.mark.asyncio
    async def test_propagates_driver_error_in_test_environment(self, tmp_path) -> None:
        with patch("cognition_api.api.main.get_settings", return_value=settings_for("test", tmp_path)), \
             patch.object(MongoDatabase, "connect", AsyncMock(side_effect=ServerSelectionTimeoutError("down"))):
            with pytest.raises(ServerSelectionTimeoutError):
                async with lifespan(FastAPI()):
                    pass

    @pytest.mark.asyncio
    async def test_failure_while_creating_collections_also_propagates(self, tmp_path) -> None:
        with patch("cognition_api.api.main.get_settings", return_value=settings_for("test", tmp_path)), \
             patch.object(MongoDatabase, "connect", AsyncMock()), \
             patch.object(MongoDatabase, "ensure_collections", AsyncMock(side_effect=ServerSelectionTimeoutError("down"))):
            with pytest.raises(ServerSelectionTimeoutError):
                async with lifespan(FastAPI()):
                    pass


@pytest.mark.asyncio
async def test_successful_startup_publishes_database_and_closes_it(tmp_path) -> None:
    # Arrange
    app = FastAPI()
    cache = MagicMock()

    # Act
    with patch("cognition_api.api.main.get_settings", return_value=settings_for("production", tmp_path)), \
         patch("cognition_api.api.main.get_service_cache", return_value=cache), \
         patch.object(MongoDatabase, "connect", AsyncMock()), \
         patch.object(MongoDatabase, "ensure_collections", AsyncMock()), \
         patch.object(MongoDatabase, "close") as close:
        async with lifespan(app):
            assert isinstance(app.state.database, MongoDatabase)
            assert (tmp_path / "uploads").is_dir()

    # Assert
    close.assert_called_once()
    cache.clear.assert_called_once()
