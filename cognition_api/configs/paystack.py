"""
Paystack configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Payment gateway configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from cognition_api.configs.base import BaseSettings


class PaystackSettings(BaseSettings):
    """Paystack REST API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAYSTACK_",
        case_sensitive=False,
        extra="ignore",
    )

    secret_key: str = Field(default="", description="Paystack secret key")
    base_url: str = Field(default="https://api.paystack.co", description="Paystack API base URL")
    currency: str = Field(default="ZAR", description="Transaction currency")
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout for gateway calls")

    @property
    def is_configured(self) -> bool:
        """True when a secret key is available."""
        return bool(self.secret_key)
