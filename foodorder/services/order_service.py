# foodorder/services/order_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from foodorder.core.errors import NotFoundError, ValidationError, store_errors
from foodorder.models.order import Order
from foodorder.repositories.order_repo import OrderRepository
from foodorder.schemas.order import VALID_STATUSES, OrderRead, OrderStatusRead

logger = logging.getLogger(__name__)


class OrderService:
    """
    Admin order administration: listing, status changes, deletion.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    def list_all_orders(self, session: Session) -> list[OrderRead]:
        """Every order, newest first."""
        with store_errors("Failed to fetch orders"):
            orders = self.order_repo.list_all(session)
        return [to_order_read(o) for o in orders]

    def get_order(self, session: Session, order_id: uuid.UUID) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        new_status: str | None,
    ) -> OrderStatusRead:
        """
        Set an order's status.

        The value is matched case-insensitively and stored lower-cased.
        Any of pending | completed | cancelled may follow any other.

        Raises:
            ValidationError: status missing or not one of the valid set.
            NotFoundError: order does not exist.
        """
        if not new_status or not new_status.strip():
            raise ValidationError("Status is required")

        normalized = new_status.strip().lower()
        if normalized not in VALID_STATUSES:
            raise ValidationError(
                f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}"
            )

        order = self.get_order(session, order_id)
        old_status = order.status
        order.status = normalized
        order.updated_at = datetime.now(timezone.utc)
        with store_errors("Failed to update order status"):
            order = self.order_repo.update(session, order)

        logger.info(f"Order {order.id} status {old_status} -> {order.status}")
        return OrderStatusRead(
            id=order.id,
            status=order.status,
            updated_at=order.updated_at,
        )

    def delete_order(self, session: Session, order_id: uuid.UUID) -> None:
        order = self.get_order(session, order_id)
        with store_errors("Failed to delete order"):
            self.order_repo.delete(session, order)
        logger.info(f"Deleted order {order_id}")


def to_order_read(order: Order) -> OrderRead:
    return OrderRead(
        id=order.id,
        user_id=order.user_id,
        status=order.status,
        total_amount=order.total_amount,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
