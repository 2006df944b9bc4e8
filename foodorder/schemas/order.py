# foodorder/schemas/order.py
import uuid
from datetime import datetime

from foodorder.schemas.common import CamelModel

VALID_STATUSES: tuple[str, ...] = ("pending", "completed", "cancelled")


class OrderRead(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID | None
    status: str
    total_amount: float
    created_at: datetime
    updated_at: datetime


class OrderStatusRead(CamelModel):
    """Minimal view returned after a status change."""

    id: uuid.UUID
    status: str
    updated_at: datetime


class OrderStatusUpdate(CamelModel):
    """
    Admin payload to change order status.

    Left as an optional string so that missing and unknown values get
    their own 400 messages from the service.
    """

    status: str | None = None


class OrderListResponse(CamelModel):
    success: bool = True
    orders: list[OrderRead]


class OrderStatusResponse(CamelModel):
    success: bool = True
    message: str
    order: OrderStatusRead
