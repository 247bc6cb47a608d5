# app/routers/orders.py
from fastapi import APIRouter, Depends, status

from app.core.auth import require_auth
from app.database import get_storage
from app.models.user import User
from app.schemas.order import CheckoutRequest, CheckoutResponse, OrderWithItemsRead
from app.services.order_service import OrderService
from app.storage.base import Storage

router = APIRouter(prefix="/orders", tags=["Orders"])

service = OrderService()


@router.post(
    "",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    payload: CheckoutRequest,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Create an order from the current user's cart.

    - 400 if the cart is empty.
    - Items are fetched afterwards via GET /orders/{id}.
    """
    order = service.create_order_from_cart(storage, current_user.id, payload)
    return {"order": order}


@router.get("", response_model=list[OrderWithItemsRead])
def list_my_orders(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    List the authenticated user's orders with their items.
    """
    return service.list_user_orders(storage, current_user.id)


@router.get("/{order_id}", response_model=OrderWithItemsRead)
def get_my_order(
    order_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_auth),
):
    """
    Get a single order (with items) belonging to the current user.
    """
    return service.get_user_order(storage, current_user.id, order_id)
