"""
Base configuration settings.

Shared by every settings class: reads .env, accepts NODE_ENV as an alias
for ENVIRONMENT so existing deployment files keep working, and exposes the
environment checks the app branches on.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

TEST_ENVIRONMENT = "test"
PRODUCTION_ENVIRONMENT = "production"


class BaseSettings(PydanticBaseSettings):
    """Environment name, debug flag and log level."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
        description="development, test or production",
    )
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO", description="Root log level name")

    @field_validator("environment", "log_level", mode="before")
    @classmethod
    def strip_value(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def is_test(self) -> bool:
        """Unreachable MongoDB is tolerated and auth may be bypassed."""
        return self.environment.lower() == TEST_ENVIRONMENT

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == PRODUCTION_ENVIRONMENT
