"""
Cart, checkout and order API endpoints.

Routes:
- POST|GET|DELETE /cart, PUT|DELETE /cart/{id} - Caller's cart
- POST /checkout - Cart to order
- GET /orders (admin), GET /orders/user
- PUT|DELETE /orders/{id} (admin)

Dependencies: cognition_api.application.services.commerce_service
System role: Commerce HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends

from cognition_api.api.deps.dependencies import (
    get_commerce_service,
    get_current_user,
    require_admin,
)
from cognition_api.api.routers.router_utils import handle_service_errors
from cognition_api.application.services.commerce_service import CommerceService
from cognition_api.models.commerce import (
    AddCartItemRequest,
    CheckoutRequest,
    UpdateCartItemRequest,
    UpdateOrderRequest,
)
from cognition_api.models.common import MessageResponse, sent_fields
from cognition_api.models.user import CurrentUser

router = APIRouter(tags=["commerce"])


@router.post("/cart", status_code=201)
@handle_service_errors
async def add_to_cart(
    request: AddCartItemRequest,
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> dict[str, Any]:
    item = await commerce_service.add_to_cart(request.model_dump(), user.model_dump())
    return {"message": "Item added to cart", "item": item}


@router.get("/cart")
@handle_service_errors
async def get_cart(
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> list[dict[str, Any]]:
    return await commerce_service.list_cart(user.uid)


@router.put("/cart/{item_id}")
@handle_service_errors
async def update_cart_item(
    item_id: str,
    request: UpdateCartItemRequest,
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> dict[str, Any]:
    """
    Update a cart line of the caller.

    Raises:
        HTTPException(400): item_id is not an ObjectId
        HTTPException(404): No such line in the caller's cart
    """
    return await commerce_service.update_cart_item(item_id, user.uid, sent_fields(request))


@router.delete("/cart/{item_id}", response_model=MessageResponse)
@handle_service_errors
async def remove_cart_item(
    item_id: str,
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> MessageResponse:
    await commerce_service.remove_cart_item(item_id, user.uid)
    return MessageResponse(message="Item removed from cart")


@router.delete("/cart")
@handle_service_errors
async def clear_cart(
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> dict[str, Any]:
    deleted = await commerce_service.clear_cart(user.uid)
    return {"message": "Cart cleared", "deletedCount": deleted}


@router.post("/checkout", status_code=201)
@handle_service_errors
async def checkout(
    request: CheckoutRequest,
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> dict[str, Any]:
    """
    Place an order for everything in the caller's cart.

    Raises:
        HTTPException(400): Cart is empty
    """
    return await commerce_service.checkout(
        user.model_dump(), payment_method=request.paymentMethod, customer=request.customer
    )


@router.get("/orders")
@handle_service_errors
async def list_orders(
    admin: CurrentUser = Depends(require_admin),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> list[dict[str, Any]]:
    return await commerce_service.list_orders()


@router.get("/orders/user")
@handle_service_errors
async def list_my_orders(
    user: CurrentUser = Depends(get_current_user),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> list[dict[str, Any]]:
    return await commerce_service.list_user_orders(user.uid)


@router.put("/orders/{order_id}")
@handle_service_errors
async def update_order(
    order_id: str,
    request: UpdateOrderRequest,
    admin: CurrentUser = Depends(require_admin),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> dict[str, Any]:
    return await commerce_service.update_order(order_id, sent_fields(request), updated_by=admin.uid)


@router.delete("/orders/{order_id}", response_model=MessageResponse)
@handle_service_errors
async def delete_order(
    order_id: str,
    admin: CurrentUser = Depends(require_admin),
    commerce_service: CommerceService = Depends(get_commerce_service),
) -> MessageResponse:
    await commerce_service.delete_order(order_id)
    return MessageResponse(message="Order deleted")
