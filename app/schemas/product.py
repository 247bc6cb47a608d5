# app/schemas/product.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class CategoryCreate(SQLModel):
    """Fields needed to persist a new category."""

    name: str
    slug: str
    image_url: str | None = None


class CategoryRead(SQLModel):
    id: int
    name: str
    slug: str
    image_url: str | None = None


class ProductCreate(SQLModel):
    """
    Fields needed to persist a new product.

    rating / review_count are optional: when omitted the store assigns
    rating=4.5 and a random review_count in 1..200.
    """

    name: str
    slug: str
    description: str | None = None
    price: Decimal = Field(gt=0)
    image_url: str | None = None
    stock: int = Field(default=0, ge=0)
    category_id: int | None = None
    is_on_sale: bool = False
    sale_price: Decimal | None = None
    is_new: bool = False
    rating: float | None = None
    review_count: int | None = None


class ProductRead(SQLModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    slug: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
    stock: int
    category_id: int | None = None
    is_on_sale: bool
    sale_price: Decimal | None = None
    is_new: bool
    rating: float | None = None
    review_count: int | None = None


class ProductDetailRead(ProductRead):
    """
    Single product view with its category embedded (None if the
    referenced category does not exist).
    """

    category: CategoryRead | None = None


class ProductSummary(SQLModel):
    """
    Compact product view embedded in cart lines and order items.
    """

    id: int
    name: str
    image_url: str | None = None
