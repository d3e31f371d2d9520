"""
Payment service orchestrator.

Starts Paystack transactions, verifies them on return or by webhook, and
records successful payments in the transactions collection.

Dependencies: cognition_api.boundary.payments, cognition_api.boundary.db.CRUD
System role: Payment use case orchestration
"""

import json
import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.transaction_crud import transaction_crud
from cognition_api.boundary.db.serialization import serialize_document, serialize_documents
from cognition_api.boundary.payments.paystack_client import PaystackClient
from cognition_api.core.exceptions import NotFoundError, ValidationError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)

CHARGE_SUCCESS_EVENT = "charge.success"


def transaction_from_gateway(data: dict[str, Any], user: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the stored transaction from a verified Paystack payload."""
    transaction = {
        "payment_id": data.get("reference"),
        "email": (data.get("customer") or {}).get("email"),
        "amount": (data.get("amount") or 0) / 100,
        "status": data.get("status"),
        "created_at": utcnow(),
        "gateway_response": data.get("gateway_response"),
    }
    if user is not None:
        transaction["uid"] = user["uid"]
        transaction["userEmail"] = user.get("email")
    return transaction


class PaymentService:
    """Payment service orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase, paystack: PaystackClient) -> None:
        """
        Initialize payment service.

        Args:
            db: Async database handle
            paystack: Gateway client
        """
        self.db = db
        self.paystack = paystack

    async def initialize_payment(
        self, user: dict[str, Any], amount: float, email: str | None = None
    ) -> dict[str, Any]:
        """
        Start a Paystack transaction for the caller.

        Raises:
            PaymentGatewayNotConfiguredError: No secret key configured
            PaymentGatewayError: Gateway rejected the request
        """
        return await self.paystack.initialize_transaction(
            email or user.get("email"),
            amount,
            metadata={"uid": user["uid"], "userEmail": user.get("email")},
        )

    async def verify_payment(self, reference: str, user: dict[str, Any]) -> dict[str, Any]:
        """
        Verify a transaction and record it when paid.

        Returns:
            dict: {"status": "success", "data": ...} or {"status": "failed", "message": ...}
        """
        response = await self.paystack.verify_transaction(reference)
        data = response.get("data") or {}
        if data.get("status") != "success":
            logger.info("Payment not successful", extra={"reference": reference, "status": data.get("status")})
            return {"status": "failed", "message": "Payment verification failed"}

        await transaction_crud.record_payment(self.db, transaction_from_gateway(data, user))
        logger.info("Payment verified", extra={"reference": reference, "uid": user["uid"]})
        return {"status": "success", "data": data}

    async def handle_webhook(self, payload: bytes, signature: str | None) -> dict[str, str]:
        """
        Process a Paystack webhook delivery.

        The payload is trusted only after its HMAC signature checks out, and a
        charge.success event is re-verified with the gateway before recording.

        Raises:
            ValidationError: Bad signature or malformed body
        """
        if not self.paystack.verify_signature(payload, signature):
            logger.warning("Rejected Paystack webhook with invalid signature")
            raise ValidationError("Invalid signature", field="x-paystack-signature")

        try:
            event = json.loads(payload)
        except ValueError as e:
            raise ValidationError("Invalid request body") from e
        if not isinstance(event, dict):
            raise ValidationError("Invalid request body")

        if event.get("event") == CHARGE_SUCCESS_EVENT:
            data = event.get("data")
            reference = data.get("reference") if isinstance(data, dict) else None
            if reference:
                response = await self.paystack.verify_transaction(reference)
                data = response.get("data") or {}
                if data.get("status") == "success":
                    await transaction_crud.record_payment(self.db, transaction_from_gateway(data))
                    logger.info("Payment recorded from webhook", extra={"reference": reference})
        return {"status": "ok"}

    async def list_transactions(self) -> list[dict[str, Any]]:
        return serialize_documents(await transaction_crud.find_many(self.db))

    async def get_transaction(self, payment_id: str) -> dict[str, Any]:
        transaction = await transaction_crud.get_by_payment_id(self.db, payment_id)
        if transaction is None:
            raise NotFoundError("Transaction not found", {"payment_id": payment_id})
        return serialize_document(transaction)

    async def create_transaction(self, fields: dict[str, Any], created_by: str) -> dict[str, Any]:
        transaction = await transaction_crud.create(
            self.db, {**fields, "createdAt": utcnow(), "createdBy": created_by}
        )
        return serialize_document(transaction)

    async def update_transaction(
        self, payment_id: str, fields: dict[str, Any], updated_by: str
    ) -> dict[str, Any]:
        fields = {name: value for name, value in fields.items() if name not in ("_id", "payment_id")}
        transaction = await transaction_crud.update_by_payment_id(
            self.db, payment_id, {**fields, "updatedAt": utcnow(), "updatedBy": updated_by}
        )
        if transaction is None:
            raise NotFoundError("Transaction not found", {"payment_id": payment_id})
        return serialize_document(transaction)

    async def delete_transaction(self, payment_id: str) -> None:
        if not await transaction_crud.delete_by_payment_id(self.db, payment_id):
            raise NotFoundError("Transaction not found", {"payment_id": payment_id})
