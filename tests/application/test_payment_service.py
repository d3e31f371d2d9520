"""
Test suite for PaymentService.

The Paystack client is an AsyncMock; the transaction CRUD is patched.

System role: Verification of payment verification and webhook handling
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from cognition_api.application.services.payment_service import PaymentService, transaction_from_gateway
from cognition_api.boundary.db.CRUD.transaction_crud import transaction_crud
from cognition_api.core.exceptions import ValidationError

PAID = {
    "status": True,
    "data": {
        "reference": "ref-1",
        "status": "success",
        "amount": 15000,
        "customer": {"email": "student@example.com"},
        "gateway_response": "Approved",
    },
}


@pytest.fixture
def paystack() -> MagicMock:
    client = MagicMock()
    client.verify_transaction = AsyncMock(return_value=PAID)
    client.initialize_transaction = AsyncMock(return_value={"status": True, "data": {}})
    client.verify_signature = MagicMock(return_value=True)
    return client


@pytest.fixture
def payment_service(paystack) -> PaymentService:
    return PaymentService(db=MagicMock(), paystack=paystack)


def test_transaction_from_gateway_converts_to_major_units() -> None:
    transaction = transaction_from_gateway(PAID["data"], {"uid": "u1", "email": "u1@example.com"})

    assert transaction["payment_id"] == "ref-1"
    assert transaction["amount"] == 150.0
    assert transaction["email"] == "student@example.com"
    assert transaction["uid"] == "u1"
    assert transaction["gateway_response"] == "Approved"


class TestVerifyPayment:
    @pytest.mark.asyncio
    async def test_success_records_transaction(self, payment_service) -> None:
        with patch.object(transaction_crud, "record_payment", AsyncMock()) as record:
            result = await payment_service.verify_payment("ref-1", {"uid": "u1", "email": "u1@example.com"})

        assert result["status"] == "success"
        assert record.await_args.args[1]["payment_id"] == "ref-1"

    @pytest.mark.asyncio
    async def test_unpaid_reference_reports_failure_without_recording(self, payment_service, paystack) -> None:
        paystack.verify_transaction.return_value = {"status": True, "data": {"status": "abandoned"}}

        with patch.object(transaction_crud, "record_payment", AsyncMock()) as record:
            result = await payment_service.verify_payment("ref-1", {"uid": "u1"})

        assert result["status"] == "failed"
        record.assert_not_awaited()


class TestWebhook:
    @pytest.mark.asyncio
    async def test_invalid_signature_is_rejected(self, payment_service, paystack) -> None:
        paystack.verify_signature.return_value = False

        with pytest.raises(ValidationError) as exc_info:
            await payment_service.handle_webhook(b"{}", "bad")

        assert exc_info.value.message == "Invalid signature"
        paystack.verify_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_charge_success_is_reverified_and_recorded(self, payment_service, paystack) -> None:
        body = json.dumps({"event": "charge.success", "data": {"reference": "ref-1"}}).encode()

        with patch.object(transaction_crud, "record_payment", AsyncMock()) as record:
            result = await payment_service.handle_webhook(body, "sig")

        assert result == {"status": "ok"}
        paystack.verify_transaction.assert_awaited_once_with("ref-1")
        record.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_events_are_acknowledged(self, payment_service, paystack) -> None:
        body = json.dumps({"event": "transfer.success", "data": {}}).encode()

        assert await payment_service.handle_webhook(body, "sig") == {"status": "ok"}
        paystack.verify_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"[]", b"\"charge.success\"", b"42"])
    async def test_signed_body_that_is_not_an_object_is_rejected(self, payment_service, paystack, body) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await payment_service.handle_webhook(body, "sig")

        assert exc_info.value.message == "Invalid request body"
        paystack.verify_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_charge_success_without_data_object_is_acknowledged(self, payment_service, paystack) -> None:
        body = json.dumps({"event": "charge.success", "data": ["ref-1"]}).encode()

        assert await payment_service.handle_webhook(body, "sig") == {"status": "ok"}
        paystack.verify_transaction.assert_not_awaited()
