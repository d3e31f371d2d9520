"""
Payment transaction CRUD operations.

Transactions are addressed by the gateway reference stored as payment_id.

Dependencies: motor, cognition_api.boundary.db
System role: Payment record persistence
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from cognition_api.boundary.db import collections
from cognition_api.boundary.db.CRUD.base_crud import BaseCRUD, Document


class TransactionCRUD(BaseCRUD):
    """CRUD operations for the transactions collection."""

    def __init__(self) -> None:
        super().__init__(collections.TRANSACTIONS)

    async def get_by_payment_id(self, db: AsyncIOMotorDatabase, payment_id: str) -> Document | None:
        return await self.find_one(db, {"payment_id": payment_id})

    async def update_by_payment_id(
        self, db: AsyncIOMotorDatabase, payment_id: str, fields: Document
    ) -> Document | None:
        return await self.update_one(db, {"payment_id": payment_id}, {"$set": fields})

    async def delete_by_payment_id(self, db: AsyncIOMotorDatabase, payment_id: str) -> bool:
        return await self.delete_one(db, {"payment_id": payment_id})

    async def record_payment(self, db: AsyncIOMotorDatabase, transaction: Document) -> Document | None:
        """
        Store a verified payment once per gateway reference.

        Verification can run from both the browser redirect and the webhook,
        so the write is keyed on payment_id.
        """
        return await self.update_one(
            db,
            {"payment_id": transaction["payment_id"]},
            {"$setOnInsert": transaction},
            upsert=True,
        )


transaction_crud = TransactionCRUD()
