# app/storage/sql.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlmodel import Session

from app.core.errors import BackendUnavailableError, DuplicateKeyError, StorageError
from app.database import create_db_and_tables
from app.models.cart import CartItem
from app.models.category import Category
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.models.user import User
from app.repositories.cart_repo import CartRepository
from app.repositories.category_repo import CategoryRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.schemas.cart import CartItemCreate
from app.schemas.order import OrderCreate, OrderItemCreate
from app.schemas.product import CategoryCreate, ProductCreate
from app.schemas.user import UserCreate
from app.storage.base import Storage, StorageBackend, product_fields

# SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is not None:
        return code == PG_UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)


class SqlStorage(Storage):
    """
    Relational backend: one table per entity, serial primary keys.

    Every call runs in its own short Session; rows are returned
    detached (expire_on_commit=False) so they stay readable after the
    session closes.
    """

    backend = StorageBackend.POSTGRES

    def __init__(self, engine: Engine):
        self.engine = engine
        self.users = UserRepository()
        self.categories = CategoryRepository()
        self.products = ProductRepository()
        self.orders = OrderRepository()
        self.carts = CartRepository()

        # at startup every schema failure counts as an unreachable backend
        try:
            create_db_and_tables(engine)
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(f"Cannot create schema: {exc}") from exc

    @contextmanager
    def _translate_errors(self, table: str) -> Iterator[None]:
        try:
            yield
        except OperationalError as exc:
            raise BackendUnavailableError(str(exc.orig)) from exc
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise DuplicateKeyError(table, str(exc.orig)) from exc
            raise StorageError(str(exc.orig)) from exc

    @contextmanager
    def _session(self, table: str) -> Iterator[Session]:
        with self._translate_errors(table):
            with Session(self.engine, expire_on_commit=False) as session:
                yield session

    # ----- Users -----

    def get_user(self, user_id: int) -> User | None:
        with self._session("users") as session:
            return self.users.get_by_id(session, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session("users") as session:
            return self.users.get_by_username(session, username)

    def get_user_by_email(self, email: str) -> User | None:
        with self._session("users") as session:
            return self.users.get_by_email(session, email)

    def create_user(self, data: UserCreate) -> User:
        with self._session("users") as session:
            return self.users.create(session, User(**data.model_dump(), is_admin=False))

    # ----- Categories -----

    def list_categories(self) -> list[Category]:
        with self._session("categories") as session:
            return self.categories.list_all(session)

    def get_category(self, category_id: int) -> Category | None:
        with self._session("categories") as session:
            return self.categories.get_by_id(session, category_id)

    def get_category_by_slug(self, slug: str) -> Category | None:
        with self._session("categories") as session:
            return self.categories.get_by_slug(session, slug)

    def create_category(self, data: CategoryCreate) -> Category:
        with self._session("categories") as session:
            return self.categories.create(session, Category(**data.model_dump()))

    # ----- Products -----

    def list_products(self) -> list[Product]:
        with self._session("products") as session:
            return self.products.list_all(session)

    def get_product(self, product_id: int) -> Product | None:
        with self._session("products") as session:
            return self.products.get_by_id(session, product_id)

    def get_product_by_slug(self, slug: str) -> Product | None:
        with self._session("products") as session:
            return self.products.get_by_slug(session, slug)

    def list_products_by_category(self, category_id: int) -> list[Product]:
        with self._session("products") as session:
            return self.products.list_by_category(session, category_id)

    def list_products_by_ids(self, ids: list[int]) -> list[Product]:
        with self._session("products") as session:
            return self.products.list_by_ids(session, list(ids))

    def create_product(self, data: ProductCreate) -> Product:
        with self._session("products") as session:
            return self.products.create(session, Product(**product_fields(data)))

    # ----- Orders -----

    def list_orders(self, user_id: int) -> list[Order]:
        with self._session("orders") as session:
            return self.orders.list_for_user(session, user_id)

    def get_order(self, order_id: int) -> Order | None:
        with self._session("orders") as session:
            return self.orders.get_by_id(session, order_id)

    def create_order(self, data: OrderCreate) -> Order:
        with self._session("orders") as session:
            return self.orders.create_order(session, Order(**data.model_dump()))

    # ----- Order items -----

    def list_order_items(self, order_id: int) -> list[OrderItem]:
        with self._session("order_items") as session:
            return self.orders.list_items_for_order(session, order_id)

    def create_order_item(self, data: OrderItemCreate) -> OrderItem:
        with self._session("order_items") as session:
            return self.orders.create_item(session, OrderItem(**data.model_dump()))

    # ----- Cart -----

    def list_cart_items(self, user_id: int) -> list[CartItem]:
        with self._session("cart_items") as session:
            return self.carts.list_for_user(session, user_id)

    def get_cart_item(self, user_id: int, product_id: int) -> CartItem | None:
        with self._session("cart_items") as session:
            return self.carts.get_item(session, user_id, product_id)

    def create_cart_item(self, data: CartItemCreate) -> CartItem:
        with self._session("cart_items") as session:
            return self.carts.create(session, CartItem(**data.model_dump()))

    def update_cart_item(self, item_id: int, quantity: int) -> CartItem | None:
        with self._session("cart_items") as session:
            item = self.carts.get_by_id(session, item_id)
            if item is None:
                return None
            item.quantity = quantity
            return self.carts.update(session, item)

    def delete_cart_item(self, item_id: int) -> bool:
        with self._session("cart_items") as session:
            item = self.carts.get_by_id(session, item_id)
            if item is None:
                return False
            self.carts.delete(session, item)
            return True

    def clear_cart(self, user_id: int) -> bool:
        with self._session("cart_items") as session:
            self.carts.clear_user_cart(session, user_id)
            return True

    # ----- Lifecycle -----

    def close(self) -> None:
        self.engine.dispose()
