# app/models/cart.py
from sqlmodel import SQLModel, Field


class CartItem(SQLModel, table=True):
    """
    Shopping cart line for a user.

    At most one row per (user_id, product_id). This is kept by callers
    looking the line up before inserting (see CartService.add_to_cart),
    not by a unique constraint.
    """

    __tablename__ = "cart_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(index=True)

    product_id: int = Field(index=True)

    quantity: int = Field(ge=1)
