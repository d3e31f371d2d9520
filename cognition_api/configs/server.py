"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Server, CORS, upload and auth-bypass configuration
"""

from pydantic import Field

from cognition_api.configs.base import BaseSettings


class ServerSettings(BaseSettings):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    skip_auth: bool = Field(
        default=False,
        description="Inject a synthetic user instead of verifying tokens (test environment only)",
    )
    uploads_dir: str = Field(default="uploads", description="Directory for uploaded avatars")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum avatar size")
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins",
    )
