"""Shared pytest fixtures: one storage instance per backend, plus API client."""

import uuid
from decimal import Decimal

import mongomock
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.database import build_engine
from app.main import create_app
from app.models.product import Product
from app.schemas.product import CategoryCreate, ProductCreate
from app.schemas.user import UserCreate
from app.storage.memory import MemoryStorage
from app.storage.mongo import MongoStorage
from app.storage.sql import SqlStorage


def make_memory_storage():
    return MemoryStorage()


def make_sql_storage():
    return SqlStorage(build_engine("sqlite://"))


def make_mongo_storage():
    return MongoStorage(mongomock.MongoClient(), db_name=f"test_{uuid.uuid4().hex}")


BACKENDS = {
    "memory": make_memory_storage,
    "sql": make_sql_storage,
    "mongo": make_mongo_storage,
}


@pytest.fixture(params=list(BACKENDS))
def storage(request):
    """Each test using this fixture runs once per backend."""
    store = BACKENDS[request.param]()
    yield store
    store.close()


@pytest.fixture
def remove_product():
    """Delete a product behind the storage port (it has no delete operation)."""

    def _remove(store, product_id: int) -> None:
        if isinstance(store, MemoryStorage):
            with store._lock:
                del store._products[product_id]
        elif isinstance(store, SqlStorage):
            with Session(store.engine) as session:
                session.delete(session.get(Product, product_id))
                session.commit()
        else:
            store.db["products"].delete_one({"id": product_id})

    return _remove


@pytest.fixture
def category(storage):
    return storage.create_category(
        CategoryCreate(name="Electronics", slug="electronics", image_url=None)
    )


@pytest.fixture
def user(storage):
    return storage.create_user(
        UserCreate(
            username="alice",
            email="alice@example.com",
            password="hashed",
            full_name="Alice Doe",
            address="1 Main St",
        )
    )


@pytest.fixture
def make_product(storage, category):
    """Factory creating products in the test category."""

    def _make(slug: str, price: str, sale_price: str | None = None, **extra) -> Product:
        return storage.create_product(
            ProductCreate(
                name=slug.replace("-", " ").title(),
                slug=slug,
                price=Decimal(price),
                is_on_sale=sale_price is not None,
                sale_price=Decimal(sale_price) if sale_price else None,
                stock=10,
                category_id=category.id,
                **extra,
            )
        )

    return _make


@pytest.fixture
def api_storage():
    return MemoryStorage()


@pytest.fixture
def client(api_storage):
    """TestClient over a seeded in-memory store (lifespan runs)."""
    with TestClient(create_app(api_storage)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user through the API and return auth headers."""

    def _register(username: str = "bob") -> dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": "secret123",
                "confirm_password": "secret123",
                "address": "42 Market St",
            },
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
