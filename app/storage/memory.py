# app/storage/memory.py
import threading
from typing import TypeVar

from sqlmodel import SQLModel

from app.core.errors import DuplicateKeyError
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
from app.storage.sequence import InMemorySequence

M = TypeVar("M", bound=SQLModel)


def _copy(record: M) -> M:
    # callers get their own instance; stored rows are never handed out
    return type(record).model_validate(record.model_dump())


class MemoryStorage(Storage):
    """
    Process-local store: one dict (id -> record) per entity.

    Zero-configuration default and startup fallback. Data is lost on
    restart. Lists come back in insertion order.
    """

    backend = StorageBackend.MEMORY

    def __init__(self):
        self.sequence = InMemorySequence()
        self._lock = threading.RLock()

        self._users: dict[int, User] = {}
        self._categories: dict[int, Category] = {}
        self._products: dict[int, Product] = {}
        self._orders: dict[int, Order] = {}
        self._order_items: dict[int, OrderItem] = {}
        self._cart_items: dict[int, CartItem] = {}

    # ----- helpers -----

    def _find(self, table: dict[int, M], **match) -> M | None:
        with self._lock:
            for record in table.values():
                if all(getattr(record, k) == v for k, v in match.items()):
                    return _copy(record)
        return None

    def _filter(self, table: dict[int, M], **match) -> list[M]:
        with self._lock:
            return [
                _copy(record)
                for record in table.values()
                if all(getattr(record, k) == v for k, v in match.items())
            ]

    def _get(self, table: dict[int, M], record_id: int) -> M | None:
        with self._lock:
            record = table.get(record_id)
            return _copy(record) if record is not None else None

    def _insert(self, table: dict[int, M], name: str, record: M) -> M:
        record.id = self.sequence.next_id(name)
        table[record.id] = record
        return _copy(record)

    def _ensure_unique(self, table: dict, name: str, **keys) -> None:
        for field, value in keys.items():
            if any(getattr(r, field) == value for r in table.values()):
                raise DuplicateKeyError(name, f"{field}={value!r}")

    # ----- Users -----

    def get_user(self, user_id: int) -> User | None:
        return self._get(self._users, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self._find(self._users, username=username)

    def get_user_by_email(self, email: str) -> User | None:
        return self._find(self._users, email=email)

    def create_user(self, data: UserCreate) -> User:
        with self._lock:
            self._ensure_unique(self._users, "users", username=data.username)
            self._ensure_unique(self._users, "users", email=data.email)
            user = User(**data.model_dump(), is_admin=False)
            return self._insert(self._users, "users", user)

    # ----- Categories -----

    def list_categories(self) -> list[Category]:
        return self._filter(self._categories)

    def get_category(self, category_id: int) -> Category | None:
        return self._get(self._categories, category_id)

    def get_category_by_slug(self, slug: str) -> Category | None:
        return self._find(self._categories, slug=slug)

    def create_category(self, data: CategoryCreate) -> Category:
        with self._lock:
            self._ensure_unique(self._categories, "categories", slug=data.slug)
            return self._insert(self._categories, "categories", Category(**data.model_dump()))

    # ----- Products -----

    def list_products(self) -> list[Product]:
        return self._filter(self._products)

    def get_product(self, product_id: int) -> Product | None:
        return self._get(self._products, product_id)

    def get_product_by_slug(self, slug: str) -> Product | None:
        return self._find(self._products, slug=slug)

    def list_products_by_category(self, category_id: int) -> list[Product]:
        return self._filter(self._products, category_id=category_id)

    def list_products_by_ids(self, ids: list[int]) -> list[Product]:
        wanted = set(ids)
        with self._lock:
            return [_copy(p) for p in self._products.values() if p.id in wanted]

    def create_product(self, data: ProductCreate) -> Product:
        with self._lock:
            self._ensure_unique(self._products, "products", slug=data.slug)
            product = Product(**product_fields(data))
            return self._insert(self._products, "products", product)

    # ----- Orders -----

    def list_orders(self, user_id: int) -> list[Order]:
        return self._filter(self._orders, user_id=user_id)

    def get_order(self, order_id: int) -> Order | None:
        return self._get(self._orders, order_id)

    def create_order(self, data: OrderCreate) -> Order:
        with self._lock:
            order = Order(**data.model_dump(), created_at=utcnow())
            return self._insert(self._orders, "orders", order)

    # ----- Order items -----

    def list_order_items(self, order_id: int) -> list[OrderItem]:
        return self._filter(self._order_items, order_id=order_id)

    def create_order_item(self, data: OrderItemCreate) -> OrderItem:
        with self._lock:
            return self._insert(self._order_items, "order_items", OrderItem(**data.model_dump()))

    # ----- Cart -----

    def list_cart_items(self, user_id: int) -> list[CartItem]:
        return self._filter(self._cart_items, user_id=user_id)

    def get_cart_item(self, user_id: int, product_id: int) -> CartItem | None:
        return self._find(self._cart_items, user_id=user_id, product_id=product_id)

    def create_cart_item(self, data: CartItemCreate) -> CartItem:
        with self._lock:
            return self._insert(self._cart_items, "cart_items", CartItem(**data.model_dump()))

    def update_cart_item(self, item_id: int, quantity: int) -> CartItem | None:
        with self._lock:
            item = self._cart_items.get(item_id)
            if item is None:
                return None
            item.quantity = quantity
            return _copy(item)

    def delete_cart_item(self, item_id: int) -> bool:
        with self._lock:
            return self._cart_items.pop(item_id, None) is not None

    def clear_cart(self, user_id: int) -> bool:
        with self._lock:
            for item_id in [i.id for i in self._cart_items.values() if i.user_id == user_id]:
                del self._cart_items[item_id]
        return True
