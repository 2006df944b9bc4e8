# foodorder/repositories/order_repo.py
import uuid

from sqlmodel import Session, select

from foodorder.models.order import Order


class OrderRepository:
    """
    Data access layer for orders.
    """

    def list_all(self, session: Session) -> list[Order]:
        """Every order, newest first."""
        stmt = select(Order).order_by(Order.created_at.desc())
        return list(session.exec(stmt).all())

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def create(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def update(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def delete(self, session: Session, order: Order) -> None:
        session.delete(order)
        session.commit()
