"""
Database configuration settings.

Manages MongoDB connection parameters for the Motor client.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cognition_api.configs.base import BaseSettings


class DatabaseSettings(BaseSettings):
    """MongoDB database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MONGO_",
        case_sensitive=False,
        extra="ignore",
    )

    uri: str = Field(default="mongodb://localhost:27017", description="MongoDB connection URI")
    db_name: str = Field(default="cognition-berries", description="MongoDB database name")
    server_selection_timeout_ms: int = Field(
        default=5000, description="Server selection timeout in milliseconds"
    )
