"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from cognition_api.configs.base import BaseSettings
from cognition_api.configs.database import DatabaseSettings
from cognition_api.configs.firebase import FirebaseSettings
from cognition_api.configs.paystack import PaystackSettings
from cognition_api.configs.server import ServerSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    paystack: PaystackSettings = Field(default_factory=PaystackSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from cognition_api.configs import get_settings
        settings = get_settings()
    """
    return Settings()
