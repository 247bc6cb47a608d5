# app/schemas/user.py
from pydantic import EmailStr, ConfigDict, field_validator, model_validator
from sqlmodel import SQLModel, Field


class UserCreate(SQLModel):
    """
    Fields needed to persist a new user.

    password must already be hashed; the store keeps it as-is.
    id and is_admin are assigned by the store.
    """

    username: str
    email: str
    password: str
    full_name: str | None = None
    address: str | None = None


class RegisterRequest(SQLModel):
    """
    Payload for POST /auth/register.

    Validation rules:
      - username / password cannot be empty
      - confirm_password must match password
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str
    full_name: str | None = None
    address: str | None = None

    @field_validator("username")
    @classmethod
    def normalize_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty")
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(SQLModel):
    """Payload for POST /auth/login."""

    model_config = ConfigDict(extra="forbid")

    username: str
    password: str


class UserRead(SQLModel):
    """Response schema returned to clients. Never includes the password."""

    id: int
    username: str
    email: str
    full_name: str | None = None
    address: str | None = None
    is_admin: bool


class AuthResponse(SQLModel):
    user: UserRead
    token: str
