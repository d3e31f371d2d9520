"""
Firebase configuration settings.

The service-account credential may come from a JSON string, a file path,
or a default file next to the working directory, in that order.

Dependencies: pydantic, pydantic_settings
System role: Identity provider configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cognition_api.configs.base import BaseSettings


class FirebaseSettings(BaseSettings):
    """Firebase Admin SDK configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FIREBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    service_account: str | None = Field(
        default=None, description="Service account credential as a JSON string"
    )
    service_account_path: str | None = Field(
        default=None, description="Path to a service account JSON file"
    )
    default_credentials_file: str = Field(
        default="firebase-service-account.json",
        description="Fallback credential file checked when nothing else is set",
    )
