# app/services/order_service.py
import logging

from fastapi import HTTPException, status

from app.core.errors import EmptyCartError
from app.models.order import Order, OrderItem
from app.models.product import Product
from app.schemas.order import (
    CheckoutRequest,
    OrderCreate,
    OrderItemCreate,
    OrderItemRead,
    OrderWithItemsRead,
)
from app.schemas.product import ProductSummary
from app.storage.base import Storage

logger = logging.getLogger(__name__)


class OrderService:
    """
    Business logic for orders.

    Responsibilities:
      - Create order from cart (checkout)
      - List / read the caller's orders with their items

    Checkout is not wrapped in a transaction: once the order row exists
    the remaining steps are best effort. A backend error after that
    point propagates and leaves a 'pending' order behind.
    """

    # -------- Checkout --------

    def create_order_from_cart(
        self,
        storage: Storage,
        user_id: int,
        payload: CheckoutRequest,
    ) -> Order:
        """
        Convert the user's cart into an Order.

        Steps:
          1. Load cart items; EmptyCartError if none (nothing written).
          2. Create Order row (status='pending', caller's total).
          3. Fetch all referenced products in one call.
          4. Create one OrderItem per cart line priced at the product's
             current effective price; lines whose product is gone are
             skipped.
          5. Clear the cart.
          6. Return the order (items are read separately).
        """
        # 1) Load cart
        cart_items = storage.list_cart_items(user_id)
        if not cart_items:
            raise EmptyCartError(user_id)

        # 2) Create the Order
        order = storage.create_order(
            OrderCreate(
                user_id=user_id,
                total=payload.total,
                status="pending",
                address=payload.address,
            )
        )

        # 3) Resolve products
        product_ids = list(dict.fromkeys(ci.product_id for ci in cart_items))
        product_map: dict[int, Product] = {
            p.id: p for p in storage.list_products_by_ids(product_ids)
        }

        # 4) Create OrderItem rows (price snapshot)
        for ci in cart_items:
            product = product_map.get(ci.product_id)
            if product is None:
                logger.warning(
                    f"Order {order.id}: product {ci.product_id} no longer exists, line skipped"
                )
                continue
            storage.create_order_item(
                OrderItemCreate(
                    order_id=order.id,
                    product_id=ci.product_id,
                    quantity=ci.quantity,
                    price=product.effective_price,
                )
            )

        # 5) Clear cart
        storage.clear_cart(user_id)

        logger.info(f"Order {order.id} placed by user {user_id}")
        return order

    # -------- Reads --------

    def list_user_orders(self, storage: Storage, user_id: int) -> list[OrderWithItemsRead]:
        """
        List the user's orders, each with its items.
        """
        return [
            self._build_order_with_items_dto(order, storage.list_order_items(order.id))
            for order in storage.list_orders(user_id)
        ]

    def get_user_order(
        self,
        storage: Storage,
        user_id: int,
        order_id: int,
    ) -> OrderWithItemsRead:
        """
        Get a single order for the user, items enriched with product info.

        - 404 if order not found.
        - 403 if it belongs to someone else.
        """
        order = storage.get_order(order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        if order.user_id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized",
            )

        items = storage.list_order_items(order.id)
        products = storage.list_products_by_ids([it.product_id for it in items])
        return self._build_order_with_items_dto(order, items, {p.id: p for p in products})

    # -------- Helper DTO builder --------

    def _build_order_with_items_dto(
        self,
        order: Order,
        items: list[OrderItem],
        products: dict[int, Product] | None = None,
    ) -> OrderWithItemsRead:
        item_dtos: list[OrderItemRead] = []
        for it in items:
            product = products.get(it.product_id) if products else None
            item_dtos.append(
                OrderItemRead(
                    id=it.id,
                    order_id=it.order_id,
                    product_id=it.product_id,
                    quantity=it.quantity,
                    price=it.price,
                    product=(
                        ProductSummary(id=product.id, name=product.name, image_url=product.image_url)
                        if product
                        else None
                    ),
                )
            )

        return OrderWithItemsRead(
            id=order.id,
            user_id=order.user_id,
            total=order.total,
            status=order.status,
            address=order.address,
            created_at=order.created_at,
            items=item_dtos,
        )
