# app/storage/mongo.py
from contextlib import contextmanager
from datetime import timezone
from decimal import Decimal
from typing import Any, Iterator, TypeVar

from bson.decimal128 import Decimal128
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError as MongoDuplicateKeyError, PyMongoError
from sqlmodel import SQLModel

from app.core.errors import BackendUnavailableError, DuplicateKeyError
from app.models.cart import CartItem
from app.models.category import Category
from app.models.order import Order, OrderItem, utcnow
from app.models.product import Product
from app.models.user import User
from app.schemas.cart import CartItemCreate
from app.schemas.order import OrderCreate, OrderItemCreate
from app.schemas.product import CategoryCreate, ProductCreate
from app.schemas.user import UserCreate
from app.storage.base import Storage, StorageBackend, product_fields
from app.storage.sequence import MongoSequence

M = TypeVar("M", bound=SQLModel)

USERS = "users"
CATEGORIES = "categories"
PRODUCTS = "products"
ORDERS = "orders"
ORDER_ITEMS = "order_items"
CART_ITEMS = "cart_items"

# Never returned to callers; records are addressed by their integer `id`.
NO_OBJECT_ID = {"_id": 0}


def to_document(record: SQLModel) -> dict[str, Any]:
    """Model -> BSON-ready dict (Decimal stored as Decimal128)."""
    doc = record.model_dump()
    for key, value in doc.items():
        if isinstance(value, Decimal):
            doc[key] = Decimal128(value)
    return doc


def from_document(model: type[M], doc: dict[str, Any]) -> M:
    """BSON dict -> model (Decimal128 back to Decimal, datetimes in UTC)."""
    data = dict(doc)
    data.pop("_id", None)
    for key, value in data.items():
        if isinstance(value, Decimal128):
            data[key] = value.to_decimal()
        elif key == "created_at" and value is not None and value.tzinfo is None:
            data[key] = value.replace(tzinfo=timezone.utc)
    return model.model_validate(data)


class MongoStorage(Storage):
    """
    Document backend: one collection per entity.

    MongoDB has no auto-increment, so integer ids come from the
    `counters` collection (MongoSequence). Unique indexes back the
    username / email / slug keys.
    """

    backend = StorageBackend.MONGO

    def __init__(self, client: MongoClient, db_name: str = "ecommerce"):
        self.client = client
        self.db = client[db_name]
        self.sequence = MongoSequence(self.db["counters"])

        # e.g. authentication failures surface here, on the first command
        try:
            self._ensure_indexes()
        except PyMongoError as exc:
            raise BackendUnavailableError(f"Cannot prepare collections: {exc}") from exc

    def _ensure_indexes(self) -> None:
        for name in (USERS, CATEGORIES, PRODUCTS, ORDERS, ORDER_ITEMS, CART_ITEMS):
            self.db[name].create_index([("id", ASCENDING)], unique=True)
        self.db[USERS].create_index([("username", ASCENDING)], unique=True)
        self.db[USERS].create_index([("email", ASCENDING)], unique=True)
        self.db[CATEGORIES].create_index([("slug", ASCENDING)], unique=True)
        self.db[PRODUCTS].create_index([("slug", ASCENDING)], unique=True)
        self.db[PRODUCTS].create_index([("category_id", ASCENDING)])
        self.db[ORDERS].create_index([("user_id", ASCENDING)])
        self.db[ORDER_ITEMS].create_index([("order_id", ASCENDING)])
        self.db[CART_ITEMS].create_index([("user_id", ASCENDING), ("product_id", ASCENDING)])

    @contextmanager
    def _translate_errors(self, collection: str) -> Iterator[None]:
        try:
            yield
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(collection, str(exc)) from exc
        except ConnectionFailure as exc:
            raise BackendUnavailableError(str(exc)) from exc

    # ----- helpers -----

    def _find_one(self, collection: str, model: type[M], query: dict) -> M | None:
        with self._translate_errors(collection):
            doc = self.db[collection].find_one(query, NO_OBJECT_ID)
        return from_document(model, doc) if doc is not None else None

    def _find(self, collection: str, model: type[M], query: dict | None = None) -> list[M]:
        with self._translate_errors(collection):
            docs = list(self.db[collection].find(query or {}, NO_OBJECT_ID))
        return [from_document(model, doc) for doc in docs]

    def _insert(self, collection: str, record: M) -> M:
        with self._translate_errors(collection):
            record.id = self.sequence.next_id(collection)
            self.db[collection].insert_one(to_document(record))
        # read back what the store persisted (datetime precision, types)
        return self._find_one(collection, type(record), {"id": record.id})

    # ----- Users -----

    def get_user(self, user_id: int) -> User | None:
        return self._find_one(USERS, User, {"id": user_id})

    def get_user_by_username(self, username: str) -> User | None:
        return self._find_one(USERS, User, {"username": username})

    def get_user_by_email(self, email: str) -> User | None:
        return self._find_one(USERS, User, {"email": email})

    def create_user(self, data: UserCreate) -> User:
        return self._insert(USERS, User(**data.model_dump(), is_admin=False))

    # ----- Categories -----

    def list_categories(self) -> list[Category]:
        return self._find(CATEGORIES, Category)

    def get_category(self, category_id: int) -> Category | None:
        return self._find_one(CATEGORIES, Category, {"id": category_id})

    def get_category_by_slug(self, slug: str) -> Category | None:
        return self._find_one(CATEGORIES, Category, {"slug": slug})

    def create_category(self, data: CategoryCreate) -> Category:
        return self._insert(CATEGORIES, Category(**data.model_dump()))

    # ----- Products -----

    def list_products(self) -> list[Product]:
        return self._find(PRODUCTS, Product)

    def get_product(self, product_id: int) -> Product | None:
        return self._find_one(PRODUCTS, Product, {"id": product_id})

    def get_product_by_slug(self, slug: str) -> Product | None:
        return self._find_one(PRODUCTS, Product, {"slug": slug})

    def list_products_by_category(self, category_id: int) -> list[Product]:
        return self._find(PRODUCTS, Product, {"category_id": category_id})

    def list_products_by_ids(self, ids: list[int]) -> list[Product]:
        return self._find(PRODUCTS, Product, {"id": {"$in": list(ids)}})

    def create_product(self, data: ProductCreate) -> Product:
        return self._insert(PRODUCTS, Product(**product_fields(data)))

    # ----- Orders -----

    def list_orders(self, user_id: int) -> list[Order]:
        return self._find(ORDERS, Order, {"user_id": user_id})

    def get_order(self, order_id: int) -> Order | None:
        return self._find_one(ORDERS, Order, {"id": order_id})

    def create_order(self, data: OrderCreate) -> Order:
        return self._insert(ORDERS, Order(**data.model_dump(), created_at=utcnow()))

    # ----- Order items -----

    def list_order_items(self, order_id: int) -> list[OrderItem]:
        return self._find(ORDER_ITEMS, OrderItem, {"order_id": order_id})

    def create_order_item(self, data: OrderItemCreate) -> OrderItem:
        return self._insert(ORDER_ITEMS, OrderItem(**data.model_dump()))

    # ----- Cart -----

    def list_cart_items(self, user_id: int) -> list[CartItem]:
        return self._find(CART_ITEMS, CartItem, {"user_id": user_id})

    def get_cart_item(self, user_id: int, product_id: int) -> CartItem | None:
        return self._find_one(
            CART_ITEMS, CartItem, {"user_id": user_id, "product_id": product_id}
        )

    def create_cart_item(self, data: CartItemCreate) -> CartItem:
        return self._insert(CART_ITEMS, CartItem(**data.model_dump()))

    def update_cart_item(self, item_id: int, quantity: int) -> CartItem | None:
        with self._translate_errors(CART_ITEMS):
            doc = self.db[CART_ITEMS].find_one_and_update(
                {"id": item_id},
                {"$set": {"quantity": quantity}},
                projection=NO_OBJECT_ID,
                return_document=ReturnDocument.AFTER,
            )
        return from_document(CartItem, doc) if doc is not None else None

    def delete_cart_item(self, item_id: int) -> bool:
        with self._translate_errors(CART_ITEMS):
            result = self.db[CART_ITEMS].delete_one({"id": item_id})
        return result.deleted_count > 0

    def clear_cart(self, user_id: int) -> bool:
        with self._translate_errors(CART_ITEMS):
            self.db[CART_ITEMS].delete_many({"user_id": user_id})
        return True

    # ----- Lifecycle -----

    def close(self) -> None:
        self.client.close()
