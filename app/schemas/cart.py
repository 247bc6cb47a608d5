# app/schemas/cart.py
from decimal import Decimal

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CartItemCreate(SQLModel):
    """
    Fields needed to persist a new cart line.
    """

    user_id: int
    product_id: int
    quantity: int = Field(ge=1)


class CartItemAdd(SQLModel):
    """
    Payload for adding to cart (user comes from the token).
    """

    model_config = ConfigDict(extra="forbid")

    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(SQLModel):
    """
    Payload for updating quantity of a cart item.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int = Field(ge=1)


class CartItemRead(SQLModel):
    id: int
    user_id: int
    product_id: int
    quantity: int


class CartProduct(SQLModel):
    """
    Product details shown inside a cart line.

    price is the current effective price; original_price the list price.
    """

    id: int
    name: str
    price: Decimal
    image_url: str | None = None
    is_on_sale: bool
    original_price: Decimal


class CartLineRead(SQLModel):
    id: int
    quantity: int
    product: CartProduct


class CartSummary(SQLModel):
    """
    Full cart response model with totals.
    """

    items: list[CartLineRead]
    total: Decimal
