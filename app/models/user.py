# app/models/user.py
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered storefront customer.

    - id is assigned by the storage backend (sequence / serial column).
    - password holds a bcrypt hash and must never be returned to clients
      (see schemas.user.UserRead).
    - is_admin is always False on creation; there is no public API to
      change it.
    """

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)

    username: str = Field(
        unique=True,
        index=True,
        max_length=50,
    )

    email: str = Field(
        unique=True,
        index=True,
    )

    password: str = Field(description="bcrypt hash")

    full_name: str | None = None
    address: str | None = None

    is_admin: bool = Field(default=False)
