# app/models/order.py
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(SQLModel, table=True):
    """
    Customer order. Immutable once placed.

    - total is computed by the caller; the store never recomputes it.
    - created_at is assigned by the store at creation.
    """

    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(index=True)

    total: Decimal = Field(max_digits=10, decimal_places=2)

    # pending is the only status this service ever writes
    status: str = Field(default="pending")

    address: str

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        description="Creation timestamp (UTC)",
    )


class OrderItem(SQLModel, table=True):
    """
    Line item inside an order.

    price is a snapshot of the product's effective price at checkout and
    is never recomputed.
    """

    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    order_id: int = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: int = Field(index=True)

    quantity: int = Field(ge=1)

    price: Decimal = Field(max_digits=10, decimal_places=2)
