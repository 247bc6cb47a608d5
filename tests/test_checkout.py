"""Checkout (cart -> order) against every backend."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from app.core.errors import BackendUnavailableError, EmptyCartError
from app.schemas.cart import CartItemCreate
from app.schemas.order import CheckoutRequest
from app.services.order_service import OrderService

service = OrderService()


@pytest.fixture
def fill_cart(storage, user):
    def _fill(*lines: tuple[int, int]) -> None:
        for product_id, quantity in lines:
            storage.create_cart_item(
                CartItemCreate(user_id=user.id, product_id=product_id, quantity=quantity)
            )

    return _fill


def checkout(storage, user, total="36.00"):
    payload = CheckoutRequest(address="1 Main St", total=Decimal(total))
    return service.create_order_from_cart(storage, user.id, payload)


class TestCheckout:
    def test_items_priced_at_effective_price_and_cart_cleared(
        self, storage, user, make_product, fill_cart
    ):
        on_sale = make_product("headphones", "10.00", sale_price="8.00")
        regular = make_product("watch", "20.00")
        fill_cart((on_sale.id, 2), (regular.id, 1))

        order = checkout(storage, user)

        assert [o.id for o in storage.list_orders(user.id)] == [order.id]
        items = sorted(storage.list_order_items(order.id), key=lambda i: i.product_id)
        assert [(i.product_id, i.quantity, i.price) for i in items] == [
            (on_sale.id, 2, Decimal("8.00")),
            (regular.id, 1, Decimal("20.00")),
        ]
        assert storage.list_cart_items(user.id) == []

    def test_order_fields(self, storage, user, make_product, fill_cart):
        product = make_product("book", "12.00")
        fill_cart((product.id, 3))

        order = checkout(storage, user, total="99.99")

        assert order.status == "pending"
        assert order.total == Decimal("99.99")  # caller's total, not recomputed
        assert order.address == "1 Main St"
        assert order.user_id == user.id
        assert order.created_at is not None

    def test_empty_cart_fails_without_side_effects(self, storage, user):
        with pytest.raises(EmptyCartError):
            checkout(storage, user)

        assert storage.list_orders(user.id) == []

    def test_vanished_product_line_is_skipped(
        self, storage, user, make_product, fill_cart, remove_product
    ):
        kept = make_product("kept", "5.00")
        gone = make_product("gone", "7.00")
        fill_cart((kept.id, 1), (gone.id, 4))
        remove_product(storage, gone.id)

        order = checkout(storage, user)

        items = storage.list_order_items(order.id)
        assert [(i.product_id, i.price) for i in items] == [(kept.id, Decimal("5.00"))]
        assert storage.list_cart_items(user.id) == []

    def test_products_resolved_in_one_batch(self, storage, user, make_product, fill_cart):
        a = make_product("a", "1.00")
        b = make_product("b", "2.00")
        fill_cart((a.id, 1), (b.id, 1))

        with patch.object(
            storage, "list_products_by_ids", wraps=storage.list_products_by_ids
        ) as batch, patch.object(storage, "get_product", side_effect=AssertionError):
            checkout(storage, user)

        batch.assert_called_once()
        assert sorted(batch.call_args.args[0]) == [a.id, b.id]

    def test_other_users_cart_untouched(self, storage, user, make_product, fill_cart):
        product = make_product("pen", "1.50")
        fill_cart((product.id, 1))
        storage.create_cart_item(
            CartItemCreate(user_id=user.id + 1, product_id=product.id, quantity=2)
        )

        checkout(storage, user)

        assert len(storage.list_cart_items(user.id + 1)) == 1

    def test_backend_error_after_order_created_propagates(
        self, storage, user, make_product, fill_cart
    ):
        product = make_product("cup", "3.00")
        fill_cart((product.id, 1))

        with patch.object(storage, "clear_cart", side_effect=BackendUnavailableError("down")):
            with pytest.raises(BackendUnavailableError):
                checkout(storage, user)

        # no rollback: the pending order and its item stay behind
        [order] = storage.list_orders(user.id)
        assert order.status == "pending"
        assert len(storage.list_order_items(order.id)) == 1
