# app/models/category.py
from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Catalog category. Created at catalog setup, read-only afterwards.
    """

    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100)

    slug: str = Field(
        max_length=255,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    image_url: str | None = None
