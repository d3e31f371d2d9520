"""
Cart and order schemas.

Prices and quantities arrive loosely typed from the storefront; they are
coerced rather than rejected.

Dependencies: pydantic
System role: Commerce API contracts
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_float(value: Any) -> float:
    try:
        return max(float(value), 0.0)
    except (TypeError, ValueError):
        return 0.0


def _coerce_quantity(value: Any) -> int:
    try:
        quantity = int(float(value))
    except (TypeError, ValueError):
        return 1
    return quantity if quantity >= 1 else 1


class AddCartItemRequest(BaseModel):
    title: str | None = None
    price: float = 0.0
    author: str = "Unknown"
    description: str = ""
    quantity: int = 1
    productId: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, value: Any) -> float:
        return _coerce_float(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> int:
        return _coerce_quantity(value)


class UpdateCartItemRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    quantity: int = 1

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, value: Any) -> int:
        return _coerce_quantity(value)


class CheckoutRequest(BaseModel):
    paymentMethod: str = "unknown"
    customer: dict[str, Any] | None = None


class UpdateOrderRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str | None = None
