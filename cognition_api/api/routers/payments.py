"""
Paystack payment API endpoints.

Routes:
- POST /api/paystack/initialize - Start a transaction
- GET /api/verify-payment/{reference} - Verify and record a transaction
- POST /api/paystack/callback - Signed Paystack webhook
- GET|POST /transactions, GET|PUT|DELETE /transactions/{payment_id} (admin)

Dependencies: cognition_api.application.services.payment_service
System role: Payments HTTP API
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from cognition_api.api.deps.dependencies import (
    get_current_user,
    get_payment_service,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.payment_service import PaymentService
from cognition_api.core.exceptions import PaymentGatewayError, PaymentGatewayNotConfiguredError
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.payment import (
    InitializePaymentRequest,
    TransactionRequest,
    UpdateTransactionRequest,
)
from cognition_api.models.user import CurrentUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


@router.post("/api/paystack/initialize")
@handle_service_errors
async def initialize_payment(
    request: InitializePaymentRequest,
    user: CurrentUser = Depends(get_current_user),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    """
    Initialize a Paystack transaction for the caller.

    Raises:
        HTTPException(501): Paystack not configured
        HTTPException(502): Gateway rejected the request
    """
    return await payment_service.initialize_payment(user.model_dump(), request.amount, request.email)


@router.get("/api/verify-payment/{reference}")
@handle_service_errors
async def verify_payment(
    reference: str,
    user: CurrentUser = Depends(get_current_user),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    """
    Verify a transaction reference and record it when paid.

    Raises:
        HTTPException(400): Gateway rejected the verification
        HTTPException(501): Paystack not configured
    """
    try:
        return await payment_service.verify_payment(reference, user.model_dump())
    except PaymentGatewayNotConfiguredError:
        raise
    except PaymentGatewayError as e:
        logger.warning("Payment verification failed", extra={"reference": reference, "error": str(e)})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@router.post("/api/paystack/callback")
@handle_service_errors
async def paystack_webhook(
    request: Request,
    x_paystack_signature: str | None = Header(None),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, str]:
    """
    Receive Paystack events.

    The raw body is checked against X-Paystack-Signature before parsing.

    Raises:
        HTTPException(400): Invalid signature or body
    """
    return await payment_service.handle_webhook(await request.body(), x_paystack_signature)


@router.get("/transactions")
@handle_service_errors
async def list_transactions(
    admin: CurrentUser = Depends(require_admin),
    payment_service: PaymentService = Depends(get_payment_service),
) -> list[dict[str, Any]]:
    return await payment_service.list_transactions()


@router.post("/transactions", status_code=201)
@handle_service_errors
async def create_transaction(
    request: TransactionRequest,
    admin: CurrentUser = Depends(require_admin),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    return await payment_service.create_transaction(sent_fields(request), created_by=admin.uid)


@router.get("/transactions/{payment_id}")
@handle_service_errors
async def get_transaction(
    payment_id: str,
    admin: CurrentUser = Depends(require_admin),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    return await payment_service.get_transaction(payment_id)


@router.put("/transactions/{payment_id}")
@handle_service_errors
async def update_transaction(
    payment_id: str,
    request: UpdateTransactionRequest,
    admin: CurrentUser = Depends(require_admin),
    payment_service: PaymentService = Depends(get_payment_service),
) -> dict[str, Any]:
    return await payment_service.update_transaction(
        payment_id, sent_fields(request), updated_by=admin.uid
    )


@router.delete("/transactions/{payment_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_transaction(
    payment_id: str,
    admin: CurrentUser = Depends(require_admin),
    payment_service: PaymentService = Depends(get_payment_service),
) -> MessageResponse:
    await payment_service.delete_transaction(payment_id)
    return MessageResponse(message="Transaction deleted")
