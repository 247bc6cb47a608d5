# app/routers/users.py
from fastapi import APIRouter, Depends, status

from app.core.auth import require_auth
from app.database import get_storage
from app.models.user import User
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead
from app.services.user_service import UserService
from app.storage.base import Storage

auth_router = APIRouter(prefix="/auth", tags=["Auth"])
router = APIRouter(prefix="/users", tags=["Users"])

service = UserService()


# -------- Auth --------


@auth_router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    storage: Storage = Depends(get_storage),
):
    """
    Register a new account and return it with an access token.

    - 409 if username or email is already taken.
    """
    return service.register(storage, payload)


@auth_router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    storage: Storage = Depends(get_storage),
):
    """
    Exchange username/password for an access token.
    """
    return service.login(storage, payload)


# -------- Self profile --------


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile (without password).
    """
    return current_user
