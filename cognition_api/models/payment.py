"""
Payment schemas.

Dependencies: pydantic
System role: Payment API contracts
"""

from pydantic import BaseModel, ConfigDict, Field


class InitializePaymentRequest(BaseModel):
    email: str | None = None
    amount: float = Field(0, ge=0, description="Amount in major units")


class TransactionRequest(BaseModel):
    """Manual transaction record (admin)."""

    model_config = ConfigDict(extra="allow")

    payment_id: str = Field(..., min_length=1)
    amount: float | None = None
    status: str | None = None


class UpdateTransactionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str | None = None
