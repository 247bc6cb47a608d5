# app/services/user_service.py
from fastapi import HTTPException, status

from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserCreate, UserRead
from app.storage.base import Storage


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - registration (uniqueness pre-check, password hashing)
      - login (credential check, token issuance)
      - map domain errors to HTTP errors
    """

    def _auth_response(self, user: User) -> AuthResponse:
        token = create_access_token(user.id, user.username)
        return AuthResponse(user=UserRead.model_validate(user), token=token)

    def register(self, storage: Storage, payload: RegisterRequest) -> AuthResponse:
        """
        Create a new account.

        Rules:
          - username and email must be unused (409 otherwise)
          - password stored as a bcrypt hash
        """
        if storage.get_user_by_username(payload.username):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already exists",
            )
        if storage.get_user_by_email(payload.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already exists",
            )

        user = storage.create_user(
            UserCreate(
                username=payload.username,
                email=payload.email,
                password=hash_password(payload.password),
                full_name=payload.full_name,
                address=payload.address,
            )
        )
        return self._auth_response(user)

    def login(self, storage: Storage, payload: LoginRequest) -> AuthResponse:
        user = storage.get_user_by_username(payload.username)
        if not user or not verify_password(payload.password, user.password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )
        return self._auth_response(user)
