# app/repositories/order_repo.py
from sqlmodel import Session, select

from app.models.order import Order, OrderItem


class OrderRepository:
    """
    Data access layer for orders and order_items.

    Orders are append-only: no update or delete here.
    """

    # ---- Orders ----

    def list_for_user(self, session: Session, user_id: int) -> list[Order]:
        stmt = select(Order).where(Order.user_id == user_id)
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, order_id: int) -> Order | None:
        return session.get(Order, order_id)

    def create_order(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    # ---- Order items ----

    def list_items_for_order(self, session: Session, order_id: int) -> list[OrderItem]:
        stmt = select(OrderItem).where(OrderItem.order_id == order_id)
        return list(session.exec(stmt).all())

    def create_item(self, session: Session, item: OrderItem) -> OrderItem:
        session.add(item)
        session.commit()
        session.refresh(item)
        return item
