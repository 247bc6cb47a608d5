# app/routers/cart.py
from fastapi import APIRouter, Depends, Response, status

from app.core.auth import require_auth
from app.database import get_storage
from app.models.user import User
from app.schemas.cart import CartItemAdd, CartItemRead, CartItemUpdate, CartSummary
from app.services.cart_service import CartService
from app.storage.base import Storage

router = APIRouter(prefix="/cart", tags=["Cart"])

service = CartService()


@router.get("", response_model=CartSummary)
def get_my_cart(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Get current user's cart with product details and total.
    """
    return service.get_cart_summary(storage, current_user.id)


@router.post("", response_model=CartItemRead)
def add_to_cart(
    payload: CartItemAdd,
    response: Response,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Add product to the current user's cart.

    - 201 with the new line, or 200 if an existing line was increased.
    """
    item, created = service.add_to_cart(storage, current_user.id, payload)
    if created:
        response.status_code = status.HTTP_201_CREATED
    return item


@router.put("/{item_id}", response_model=CartItemRead)
def update_cart_item(
    item_id: int,
    payload: CartItemUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Set the quantity of a cart line.
    """
    return service.update_quantity(storage, current_user.id, item_id, payload.quantity)


@router.delete("/{item_id}")
def remove_cart_item(
    item_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Remove a line from the cart.
    """
    service.remove_item(storage, current_user.id, item_id)
    return {"message": "Cart item removed"}


@router.delete("")
def clear_cart(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Clear the entire cart.
    """
    service.clear_cart(storage, current_user.id)
    return {"message": "Cart cleared"}
