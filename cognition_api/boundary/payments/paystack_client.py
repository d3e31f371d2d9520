"""
Paystack REST client.

Initializes and verifies transactions and checks webhook signatures.
Amounts are sent in minor units (cents for ZAR).

Dependencies: httpx
System role: Payment gateway integration
"""

import hashlib
import hmac
import logging
from typing import Any

import httpx

from cognition_api.configs.paystack import PaystackSettings
from cognition_api.core.exceptions import (
    PaymentGatewayError,
    PaymentGatewayNotConfiguredError,
)

logger = logging.getLogger(__name__)


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount to the integer Paystack expects."""
    return round((amount or 0) * 100)


class PaystackClient:
    """
    Paystack API wrapper.

    Usage:
        client = PaystackClient(settings.paystack)
        response = await client.initialize_transaction("a@b.co", 150.0, {"uid": uid})
    """

    def __init__(
        self,
        settings: PaystackSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Paystack credentials and endpoint
            transport: Optional httpx transport (tests)
        """
        self._settings = settings
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    def _client(self) -> httpx.AsyncClient:
        if not self.is_configured:
            raise PaymentGatewayNotConfiguredError()
        return httpx.AsyncClient(
            base_url=self._settings.base_url,
            headers={
                "Authorization": f"Bearer {self._settings.secret_key}",
                "Content-Type": "application/json",
            },
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        )

    async def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        async with self._client() as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as e:
                logger.error("Paystack request failed", extra={"operation": operation, "error": str(e)})
                raise PaymentGatewayError(f"Connection error: {e}", operation=operation) from e

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        if response.is_error or not body.get("status"):
            message = body.get("message") or f"Paystack returned HTTP {response.status_code}"
            logger.error(
                "Paystack rejected request",
                extra={"operation": operation, "status_code": response.status_code, "error": message},
            )
            raise PaymentGatewayError(message, operation=operation)
        return body

    async def initialize_transaction(
        self, email: str, amount: float, metadata: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Start a transaction.

        Args:
            email: Customer email
            amount: Amount in major units
            metadata: Values echoed back on verification

        Returns:
            dict: Gateway response (authorization_url, access_code, reference under data)
        """
        payload = {
            "email": email,
            "amount": to_minor_units(amount),
            "currency": self._settings.currency,
            "metadata": metadata or {},
        }
        return await self._request("initialize", "POST", "/transaction/initialize", json=payload)

    async def verify_transaction(self, reference: str) -> dict[str, Any]:
        """
        Look up a transaction by reference.

        Returns:
            dict: Gateway response; data.status is "success" for a paid transaction
        """
        return await self._request("verify", "GET", f"/transaction/verify/{reference}")

    def verify_signature(self, payload: bytes, signature: str | None) -> bool:
        """Check an X-Paystack-Signature header against the raw request body."""
        if not signature or not self.is_configured:
            return False
        expected = hmac.new(
            self._settings.secret_key.encode("utf-8"), payload, hashlib.sha512
        ).hexdigest()
        return hmac.compare_digest(expected, signature)
