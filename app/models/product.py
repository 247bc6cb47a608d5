# app/models/product.py
from decimal import Decimal

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Pricing:
      - price       : list price
      - is_on_sale  : whether sale_price applies
      - sale_price  : nullable, only meaningful when is_on_sale

    rating / review_count are seed attributes filled in by the store
    when the creator does not provide them.
    """

    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=255, index=True)

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    description: str | None = None

    price: Decimal = Field(max_digits=10, decimal_places=2)

    image_url: str | None = None

    stock: int = Field(default=0, ge=0)

    category_id: int | None = Field(
        default=None,
        foreign_key="categories.id",
        index=True,
    )

    is_on_sale: bool = Field(default=False)
    sale_price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    is_new: bool = Field(default=False)

    rating: float | None = None
    review_count: int | None = None

    @property
    def effective_price(self) -> Decimal:
        """Sale price when on sale and set, otherwise the list price."""
        if self.is_on_sale and self.sale_price is not None:
            return self.sale_price
        return self.price
