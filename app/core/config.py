# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Storage selection (first match wins):
      - MONGODB_URL  -> document store (MongoDB)
      - DATABASE_URL -> relational store (Postgres, any SQLAlchemy URL)
      - neither      -> in-memory store

    If the configured durable store cannot be reached at startup the
    app falls back to the in-memory store.
    """

    PROJECT_NAME: str = "ShopEase Backend"
    API_PREFIX: str = "/api"

    # Durable storage (both optional)
    DATABASE_URL: str | None = None
    DATABASE_SSLMODE: str | None = None
    MONGODB_URL: str | None = None
    MONGODB_DB: str = "ecommerce"
    MONGODB_TIMEOUT_MS: int = 5000

    # Token issuance
    JWT_SECRET: str = "very-secret-key-should-be-in-env"
    JWT_ALG: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60

    SEED_SAMPLE_DATA: bool = True

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5000",
    ]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
