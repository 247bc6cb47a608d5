# app/storage/base.py
"""
Storage port shared by every backend.

Contract common to all adapters:
  - get_* returns the record or None; absence never raises.
  - list_* returns a (possibly empty) list. Only the in-memory backend
    guarantees insertion order; callers must not rely on ordering.
  - create_* returns the persisted record with its id assigned.
  - Transport failures raise BackendUnavailableError, unique key
    collisions raise DuplicateKeyError.
  - Orders and order items are immutable: create and list only.
"""
import random
from abc import ABC, abstractmethod
from enum import Enum

from app.models.cart import CartItem
from app.models.category import Category
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.models.user import User
from app.schemas.cart import CartItemCreate
from app.schemas.order import OrderCreate, OrderItemCreate
from app.schemas.product import CategoryCreate, ProductCreate
from app.schemas.user import UserCreate

DEFAULT_RATING = 4.5


class StorageBackend(str, Enum):
    MEMORY = "memory"
    POSTGRES = "postgres"
    MONGO = "mongo"


def product_fields(data: ProductCreate) -> dict:
    """
    Column values for a new product, with seed attributes filled in.
    """
    fields = data.model_dump()
    if fields["rating"] is None:
        fields["rating"] = DEFAULT_RATING
    if fields["review_count"] is None:
        fields["review_count"] = random.randint(1, 200)
    return fields


class Storage(ABC):
    backend: StorageBackend

    # ----- Users -----

    @abstractmethod
    def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> User: ...

    # ----- Categories -----

    @abstractmethod
    def list_categories(self) -> list[Category]: ...

    @abstractmethod
    def get_category(self, category_id: int) -> Category | None: ...

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Category | None: ...

    @abstractmethod
    def create_category(self, data: CategoryCreate) -> Category: ...

    # ----- Products -----

    @abstractmethod
    def list_products(self) -> list[Product]: ...

    @abstractmethod
    def get_product(self, product_id: int) -> Product | None: ...

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> Product | None: ...

    @abstractmethod
    def list_products_by_category(self, category_id: int) -> list[Product]: ...

    @abstractmethod
    def list_products_by_ids(self, ids: list[int]) -> list[Product]: ...

    @abstractmethod
    def create_product(self, data: ProductCreate) -> Product: ...

    # ----- Orders -----

    @abstractmethod
    def list_orders(self, user_id: int) -> list[Order]: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Order | None: ...

    @abstractmethod
    def create_order(self, data: OrderCreate) -> Order: ...

    # ----- Order items -----

    @abstractmethod
    def list_order_items(self, order_id: int) -> list[OrderItem]: ...

    @abstractmethod
    def create_order_item(self, data: OrderItemCreate) -> OrderItem: ...

    # ----- Cart -----

    @abstractmethod
    def list_cart_items(self, user_id: int) -> list[CartItem]: ...

    @abstractmethod
    def get_cart_item(self, user_id: int, product_id: int) -> CartItem | None: ...

    @abstractmethod
    def create_cart_item(self, data: CartItemCreate) -> CartItem: ...

    @abstractmethod
    def update_cart_item(self, item_id: int, quantity: int) -> CartItem | None: ...

    @abstractmethod
    def delete_cart_item(self, item_id: int) -> bool: ...

    @abstractmethod
    def clear_cart(self, user_id: int) -> bool:
        """Delete every cart line of the user. True once the call succeeds."""

    # ----- Lifecycle -----

    def close(self) -> None:
        """Release connections held by the backend."""
