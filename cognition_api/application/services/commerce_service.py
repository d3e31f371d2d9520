"""
Cart, checkout and order service.

Dependencies: cognition_api.boundary.db.CRUD
System role: Commerce use case orchestration
"""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db.CRUD.commerce_crud import cart_crud, order_crud
from cognition_api.boundary.db.object_ids import require_object_id
from cognition_api.boundary.db.serialization import serialize_document, serialize_documents
from cognition_api.core.exceptions import EmptyCartError, NotFoundError
from cognition_api.core.timestamps import utcnow

logger = logging.getLogger(__name__)

ORDER_CONFIRMED = "Confirmed"


def order_total(items: list[dict[str, Any]]) -> float:
    """Sum of price x quantity; quantity defaults to 1."""
    return sum((item.get("price") or 0) * (item.get("quantity") or 1) for item in items)


class CommerceService:
    """Cart and order orchestrator."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db

    async def add_to_cart(self, fields: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
        item = await cart_crud.create(
            self.db,
            {
                "uid": user["uid"],
                "userEmail": user.get("email"),
                **fields,
                "createdAt": utcnow(),
            },
        )
        return serialize_document(item)

    async def list_cart(self, uid: str) -> list[dict[str, Any]]:
        return serialize_documents(await cart_crud.list_for_user(self.db, uid))

    async def update_cart_item(self, item_id: str, uid: str, fields: dict[str, Any]) -> dict[str, Any]:
        oid = require_object_id(item_id, "Invalid cart item ID format")
        fields = {name: value for name, value in fields.items() if name not in ("_id", "uid")}
        item = await cart_crud.update_owned(self.db, oid, uid, {**fields, "updatedAt": utcnow()})
        if item is None:
            raise NotFoundError("Cart item not found", {"item_id": item_id})
        return serialize_document(item)

    async def remove_cart_item(self, item_id: str, uid: str) -> None:
        oid = require_object_id(item_id, "Invalid cart item ID format")
        if not await cart_crud.delete_owned(self.db, oid, uid):
            raise NotFoundError("Cart item not found", {"item_id": item_id})

    async def clear_cart(self, uid: str) -> int:
        return await cart_crud.clear(self.db, uid)

    async def checkout(
        self,
        user: dict[str, Any],
        payment_method: str = "unknown",
        customer: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Turn the caller's cart into a confirmed order and empty the cart.

        Returns:
            dict: message, orderId, order

        Raises:
            EmptyCartError: If the cart has no items
        """
        cart = await cart_crud.list_for_user(self.db, user["uid"])
        if not cart:
            raise EmptyCartError("Cart is empty")

        items = [
            {
                "productId": item.get("productId"),
                "title": item.get("title"),
                "quantity": item.get("quantity") or 1,
                "price": item.get("price"),
            }
            for item in cart
        ]
        order = await order_crud.create(
            self.db,
            {
                "uid": user["uid"],
                "userEmail": user.get("email"),
                "items": items,
                "totalAmount": order_total(items),
                "paymentMethod": payment_method or "unknown",
                "customer": customer,
                "status": ORDER_CONFIRMED,
                "createdAt": utcnow(),
            },
        )
        await cart_crud.clear(self.db, user["uid"])

        logger.info(
            "Order placed",
            extra={"order_id": str(order["_id"]), "uid": user["uid"], "total": order["totalAmount"]},
        )
        order = serialize_document(order)
        return {"message": "Order placed successfully", "orderId": order["_id"], "order": order}

    async def list_orders(self) -> list[dict[str, Any]]:
        return serialize_documents(await order_crud.find_many(self.db))

    async def list_user_orders(self, uid: str) -> list[dict[str, Any]]:
        return serialize_documents(await order_crud.list_for_user(self.db, uid))

    async def update_order(self, order_id: str, fields: dict[str, Any], updated_by: str) -> dict[str, Any]:
        oid = require_object_id(order_id, "Invalid order ID format")
        fields = {name: value for name, value in fields.items() if name != "_id"}
        order = await order_crud.update_by_id(
            self.db, oid, {**fields, "updatedAt": utcnow(), "updatedBy": updated_by}
        )
        if order is None:
            raise NotFoundError("Order not found", {"order_id": order_id})
        return serialize_document(order)

    async def delete_order(self, order_id: str) -> None:
        oid = require_object_id(order_id, "Invalid order ID format")
        if not await order_crud.delete_by_id(self.db, oid):
            raise NotFoundError("Order not found", {"order_id": order_id})
