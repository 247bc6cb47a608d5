"""
Storage port behaviour, run against every backend
(in-memory, SQLite-backed relational, mongomock-backed document).
"""

from decimal import Decimal

import pytest

from app.core.errors import DuplicateKeyError
from app.schemas.cart import CartItemCreate
from app.schemas.order import OrderCreate, OrderItemCreate
from app.schemas.product import CategoryCreate
from app.schemas.user import UserCreate


class TestUsers:
    def test_create_then_get_returns_same_record(self, storage, user):
        assert storage.get_user(user.id).model_dump() == user.model_dump()

    def test_new_users_are_never_admin(self, user):
        assert user.is_admin is False

    def test_lookup_by_username_and_email(self, storage, user):
        assert storage.get_user_by_username("alice").id == user.id
        assert storage.get_user_by_email("alice@example.com").id == user.id

    def test_missing_user_is_none(self, storage):
        assert storage.get_user(999) is None
        assert storage.get_user_by_username("nobody") is None
        assert storage.get_user_by_email("nobody@example.com") is None

    def test_duplicate_username_rejected(self, storage, user):
        with pytest.raises(DuplicateKeyError):
            storage.create_user(
                UserCreate(username="alice", email="other@example.com", password="x")
            )

    def test_duplicate_email_rejected(self, storage, user):
        with pytest.raises(DuplicateKeyError):
            storage.create_user(
                UserCreate(username="alice2", email="alice@example.com", password="x")
            )


class TestCatalog:
    def test_category_create_then_get(self, storage, category):
        assert storage.get_category(category.id).model_dump() == category.model_dump()
        assert storage.get_category_by_slug("electronics").id == category.id
        assert [c.id for c in storage.list_categories()] == [category.id]

    def test_duplicate_category_slug_rejected(self, storage, category):
        with pytest.raises(DuplicateKeyError):
            storage.create_category(CategoryCreate(name="Other", slug="electronics"))

    def test_product_create_then_get(self, storage, make_product):
        product = make_product("smart-watch", "149.99")

        fetched = storage.get_product(product.id)
        assert fetched.model_dump() == product.model_dump()
        assert fetched.price == Decimal("149.99")
        assert storage.get_product_by_slug("smart-watch").id == product.id

    def test_product_seed_attributes_filled_in(self, make_product):
        product = make_product("tablet", "349.99")

        assert product.rating == 4.5
        assert 1 <= product.review_count <= 200

    def test_product_seed_attributes_kept_when_given(self, make_product):
        product = make_product("tent", "199.99", rating=3.0, review_count=7)

        assert product.rating == 3.0
        assert product.review_count == 7

    def test_duplicate_product_slug_rejected(self, make_product):
        make_product("rc-car", "89.99")

        with pytest.raises(DuplicateKeyError):
            make_product("rc-car", "99.99")

    def test_list_filters(self, storage, make_product):
        a = make_product("a", "1.00")
        b = make_product("b", "2.00")
        c = make_product("c", "3.00")
        other = storage.create_category(CategoryCreate(name="Fashion", slug="fashion"))

        assert {p.id for p in storage.list_products()} == {a.id, b.id, c.id}
        assert {p.id for p in storage.list_products_by_category(a.category_id)} == {a.id, b.id, c.id}
        assert storage.list_products_by_category(other.id) == []
        assert {p.id for p in storage.list_products_by_ids([a.id, c.id, 999])} == {a.id, c.id}
        assert storage.list_products_by_ids([]) == []

    def test_missing_product_is_none(self, storage):
        assert storage.get_product(42) is None
        assert storage.get_product_by_slug("ghost") is None


class TestOrders:
    def test_order_create_then_get(self, storage, user):
        order = storage.create_order(
            OrderCreate(user_id=user.id, total=Decimal("36.00"), address="1 Main St")
        )

        assert order.status == "pending"
        assert order.created_at is not None
        assert storage.get_order(order.id).model_dump() == order.model_dump()

    def test_list_orders_by_user(self, storage, user):
        mine = storage.create_order(OrderCreate(user_id=user.id, total=Decimal("1"), address="x"))
        storage.create_order(OrderCreate(user_id=user.id + 100, total=Decimal("2"), address="y"))

        assert [o.id for o in storage.list_orders(user.id)] == [mine.id]

    def test_order_items_by_order(self, storage, user, make_product):
        product = make_product("lamp", "15.50")
        order = storage.create_order(OrderCreate(user_id=user.id, total=Decimal("31"), address="x"))
        other = storage.create_order(OrderCreate(user_id=user.id, total=Decimal("1"), address="x"))

        item = storage.create_order_item(
            OrderItemCreate(order_id=order.id, product_id=product.id, quantity=2, price=Decimal("15.50"))
        )

        assert [i.model_dump() for i in storage.list_order_items(order.id)] == [item.model_dump()]
        assert storage.list_order_items(other.id) == []


class TestCart:
    def test_check_then_create_protocol(self, storage, user, make_product):
        product = make_product("mug", "5.00")

        assert storage.get_cart_item(user.id, product.id) is None
        created = storage.create_cart_item(
            CartItemCreate(user_id=user.id, product_id=product.id, quantity=1)
        )

        found = storage.get_cart_item(user.id, product.id)
        assert found.model_dump() == created.model_dump()
        assert len(storage.list_cart_items(user.id)) == 1

    def test_update_quantity(self, storage, user):
        item = storage.create_cart_item(CartItemCreate(user_id=user.id, product_id=1, quantity=1))

        updated = storage.update_cart_item(item.id, 5)

        assert updated.quantity == 5
        assert storage.get_cart_item(user.id, 1).quantity == 5

    def test_update_missing_item_is_none(self, storage):
        assert storage.update_cart_item(12345, 2) is None

    def test_delete_by_id(self, storage, user):
        item = storage.create_cart_item(CartItemCreate(user_id=user.id, product_id=1, quantity=1))

        assert storage.delete_cart_item(item.id) is True
        assert storage.delete_cart_item(item.id) is False
        assert storage.list_cart_items(user.id) == []

    def test_clear_cart_leaves_other_users_alone(self, storage):
        for product_id in (1, 2, 3):
            storage.create_cart_item(CartItemCreate(user_id=1, product_id=product_id, quantity=1))
        theirs = storage.create_cart_item(CartItemCreate(user_id=2, product_id=1, quantity=4))

        assert storage.clear_cart(1) is True

        assert storage.list_cart_items(1) == []
        assert [i.model_dump() for i in storage.list_cart_items(2)] == [theirs.model_dump()]

    def test_ids_are_never_reused(self, storage):
        first = storage.create_cart_item(CartItemCreate(user_id=1, product_id=1, quantity=1))
        storage.delete_cart_item(first.id)

        second = storage.create_cart_item(CartItemCreate(user_id=1, product_id=1, quantity=1))

        assert second.id > first.id

    def test_returned_records_are_not_live(self, storage, user):
        item = storage.create_cart_item(CartItemCreate(user_id=user.id, product_id=1, quantity=1))
        item.quantity = 99

        assert storage.get_cart_item(user.id, 1).quantity == 1
