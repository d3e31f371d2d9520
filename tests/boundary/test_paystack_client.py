"""
Test suite for the Paystack client.

Requests are served by httpx.MockTransport, so no network is used.

System role: Verification of payment gateway integration
"""

import hashlib
import hmac
import json

import httpx
import pytest

from cognition_api.boundary.payments.paystack_client import PaystackClient, to_minor_units
from cognition_api.configs.paystack import PaystackSettings
from cognition_api.core.exceptions import PaymentGatewayError, PaymentGatewayNotConfiguredError

SECRET = "sk_test_secret"


def make_client(handler) -> PaystackClient:
    settings = PaystackSettings(secret_key=SECRET, base_url="https://paystack.test", currency="ZAR")
    return PaystackClient(settings, transport=httpx.MockTransport(handler))


def test_to_minor_units_rounds_to_cents() -> None:
    assert to_minor_units(150.0) == 15000
    assert to_minor_units(19.99) == 1999
    assert to_minor_units(0) == 0


class TestInitializeTransaction:
    @pytest.mark.asyncio
    async def test_sends_minor_units_currency_and_bearer_key(self) -> None:
        # Arrange
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200, json={"status": True, "data": {"authorization_url": "https://pay", "reference": "ref-1"}}
            )

        client = make_client(handler)

        # Act
        response = await client.initialize_transaction("a@example.com", 150.5, {"uid": "u1"})

        # Assert
        assert response["data"]["reference"] == "ref-1"
        assert seen["path"] == "/transaction/initialize"
        assert seen["auth"] == f"Bearer {SECRET}"
        assert seen["body"] == {
            "email": "a@example.com",
            "amount": 15050,
            "currency": "ZAR",
            "metadata": {"uid": "u1"},
        }

    @pytest.mark.asyncio
    async def test_gateway_rejection_raises_with_gateway_message(self) -> None:
        client = make_client(
            lambda request: httpx.Response(400, json={"status": False, "message": "Invalid key"})
        )

        with pytest.raises(PaymentGatewayError) as exc_info:
            await client.initialize_transaction("a@example.com", 10)

        assert exc_info.value.message == "Invalid key"
        assert exc_info.value.details["operation"] == "initialize"

    @pytest.mark.asyncio
    async def test_connection_failure_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("boom", request=request)

        with pytest.raises(PaymentGatewayError) as exc_info:
            await make_client(handler).initialize_transaction("a@example.com", 10)

        assert exc_info.value.message.startswith("Connection error")

    @pytest.mark.asyncio
    async def test_missing_secret_key_raises_not_configured(self) -> None:
        client = PaystackClient(PaystackSettings(secret_key=""))

        with pytest.raises(PaymentGatewayNotConfiguredError):
            await client.initialize_transaction("a@example.com", 10)


@pytest.mark.asyncio
async def test_verify_transaction_hits_reference_path() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/transaction/verify/ref-42"
        return httpx.Response(200, json={"status": True, "data": {"status": "success"}})

    response = await make_client(handler).verify_transaction("ref-42")

    assert response["data"]["status"] == "success"


class TestVerifySignature:
    def test_matching_hmac_sha512_is_accepted(self) -> None:
        payload = b'{"event":"charge.success"}'
        signature = hmac.new(SECRET.encode(), payload, hashlib.sha512).hexdigest()

        assert make_client(lambda r: httpx.Response(200)).verify_signature(payload, signature)

    def test_wrong_or_missing_signature_is_rejected(self) -> None:
        client = make_client(lambda r: httpx.Response(200))

        assert not client.verify_signature(b"{}", "deadbeef")
        assert not client.verify_signature(b"{}", None)
