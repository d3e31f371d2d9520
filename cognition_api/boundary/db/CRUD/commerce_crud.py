"""
Cart and order CRUD operations.

Cart items and orders are scoped to the owning uid; checkout copies the
cart into an order-summary document and empties the cart.

Dependencies: motor, cognition_api.boundary.db
System role: Commerce persistence
"""

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


class CartCRUD(BaseCRUD):
    """CRUD operations for the Cart collection."""

    def __init__(self) -> None:
        super().__init__(collections.CART)

    async def list_for_user(self, db: AsyncIOMotorDatabase, uid: str) -> list[Document]:
        return await self.find_many(db, {"uid": uid})

    async def update_owned(
        self, db: AsyncIOMotorDatabase, item_id: ObjectId, uid: str, fields: Document
    ) -> Document | None:
        return await self.update_one(db, {"_id": item_id, "uid": uid}, {"$set": fields})

    async def delete_owned(self, db: AsyncIOMotorDatabase, item_id: ObjectId, uid: str) -> bool:
        return await self.delete_one(db, {"_id": item_id, "uid": uid})

    async def clear(self, db: AsyncIOMotorDatabase, uid: str) -> int:
        """
        Remove every cart item belonging to a user.

        Returns:
            Number of deleted items
        """
        result = await self.collection(db).delete_many({"uid": uid})
        return result.deleted_count


class OrderCRUD(BaseCRUD):
    """CRUD operations for the order-summary collection."""

    def __init__(self) -> None:
        super().__init__(collections.ORDERS)

    async def list_for_user(self, db: AsyncIOMotorDatabase, uid: str) -> list[Document]:
        return await self.find_many(db, {"uid": uid})


cart_crud = CartCRUD()
order_crud = OrderCRUD()
