# app/database.py
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from app.core.errors import BackendUnavailableError

# Import models so SQLModel metadata is populated before create_all()
from app.models import cart as _cart_models  # noqa: F401
from app.models import category as _category_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import user as _user_models  # noqa: F401
from app.storage.base import Storage


def build_engine(db_url: str, sslmode: str | None = None) -> Engine:
    """
    Create the SQLAlchemy engine for the relational backend.

    - sslmode       : appended to Postgres URLs when configured
                      (e.g. "require" for managed cloud databases)
    - pool_pre_ping : validate connections before using them
    - SQLite (tests / local runs) shares one connection across threads

    Raises:
        BackendUnavailableError: if the URL cannot be parsed or its
        driver is not installed.
    """
    try:
        if db_url.startswith("sqlite"):
            return create_engine(
                db_url,
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

        if sslmode and "sslmode=" not in db_url:
            sep = "&" if "?" in db_url else "?"
            db_url = f"{db_url}{sep}sslmode={sslmode}"

        return create_engine(
            db_url,
            echo=False,        # set to True if you want to debug SQL queries
            pool_pre_ping=True,
        )
    except (ArgumentError, ImportError) as exc:
        raise BackendUnavailableError(f"Cannot build database engine: {exc}") from exc


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once when the relational backend starts.
    """
    SQLModel.metadata.create_all(engine)


def get_storage(request: Request) -> Storage:
    """
    FastAPI dependency returning the storage backend selected at startup.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(storage: Storage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
