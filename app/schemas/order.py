# app/schemas/order.py
from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from app.schemas.product import ProductSummary


class OrderCreate(SQLModel):
    """
    Fields needed to persist a new order.
    id and created_at are assigned by the store.
    """

    user_id: int
    total: Decimal
    status: str = "pending"
    address: str


class OrderItemCreate(SQLModel):
    """
    Fields needed to persist a new order line.
    """

    order_id: int
    product_id: int
    quantity: int = Field(ge=1)
    price: Decimal


class CheckoutRequest(SQLModel):
    """
    Payload for placing an order from the current cart.

    User provides:
      - shipping address
      - total (computed client-side from the cart; stored as given)

    Backend derives:
      - user_id from token
      - status = 'pending'
      - items from cart, priced at the current effective price
    """

    model_config = ConfigDict(extra="forbid")

    address: str
    total: Decimal = Field(ge=0)

    @field_validator("address")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("address cannot be empty")
        return v


class OrderRead(SQLModel):
    """
    Lightweight representation of an order (without items).
    """

    id: int
    user_id: int
    total: Decimal
    status: str
    address: str
    created_at: datetime


class OrderItemRead(SQLModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: Decimal
    product: ProductSummary | None = None


class OrderWithItemsRead(OrderRead):
    """
    Full order view including items.
    """

    items: list[OrderItemRead]


class CheckoutResponse(SQLModel):
    order: OrderRead
