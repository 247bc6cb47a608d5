# app/services/cart_service.py
from decimal import Decimal

from fastapi import HTTPException, status

from app.models.cart import CartItem
from app.schemas.cart import (
    CartItemAdd,
    CartItemCreate,
    CartLineRead,
    CartProduct,
    CartSummary,
)
from app.storage.base import Storage


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate product existence on add
      - keep one line per (user, product): look up, then update or create
      - price lines at the product's current effective price
      - restrict item-level changes to the caller's own lines
    """

    # ---- internal helpers ----

    def _get_own_item(self, storage: Storage, user_id: int, item_id: int) -> CartItem:
        for item in storage.list_cart_items(user_id):
            if item.id == item_id:
                return item
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Cart item not found",
        )

    # ---- public operations ----

    def get_cart_summary(self, storage: Storage, user_id: int) -> CartSummary:
        """
        Return full cart summary:
          - lines with product details (effective price, list price)
          - total = sum(quantity * effective price)

        Lines whose product no longer exists are left out.
        """
        items = storage.list_cart_items(user_id)
        if not items:
            return CartSummary(items=[], total=Decimal("0"))

        products = storage.list_products_by_ids(list({it.product_id for it in items}))
        product_map = {p.id: p for p in products}

        lines: list[CartLineRead] = []
        total = Decimal("0")

        for it in items:
            product = product_map.get(it.product_id)
            if product is None:
                continue
            price = product.effective_price
            total += it.quantity * price
            lines.append(
                CartLineRead(
                    id=it.id,
                    quantity=it.quantity,
                    product=CartProduct(
                        id=product.id,
                        name=product.name,
                        price=price,
                        image_url=product.image_url,
                        is_on_sale=product.is_on_sale,
                        original_price=product.price,
                    ),
                )
            )

        return CartSummary(items=lines, total=total)

    def add_to_cart(
        self,
        storage: Storage,
        user_id: int,
        payload: CartItemAdd,
    ) -> tuple[CartItem, bool]:
        """
        Add a product to the user's cart.

        Returns (item, created): created is False when an existing line
        had its quantity increased.
        """
        if storage.get_product(payload.product_id) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )

        existing = storage.get_cart_item(user_id, payload.product_id)
        if existing:
            updated = storage.update_cart_item(
                existing.id, existing.quantity + payload.quantity
            )
            if updated is not None:
                return updated, False

        item = storage.create_cart_item(
            CartItemCreate(
                user_id=user_id,
                product_id=payload.product_id,
                quantity=payload.quantity,
            )
        )
        return item, True

    def update_quantity(
        self,
        storage: Storage,
        user_id: int,
        item_id: int,
        quantity: int,
    ) -> CartItem:
        self._get_own_item(storage, user_id, item_id)
        item = storage.update_cart_item(item_id, quantity)
        if item is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )
        return item

    def remove_item(self, storage: Storage, user_id: int, item_id: int) -> None:
        self._get_own_item(storage, user_id, item_id)
        if not storage.delete_cart_item(item_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Cart item not found",
            )

    def clear_cart(self, storage: Storage, user_id: int) -> None:
        storage.clear_cart(user_id)
