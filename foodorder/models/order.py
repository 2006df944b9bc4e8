# foodorder/models/order.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Customer order.

    Only the fields the admin dashboard and order administration
    work with: who placed it, its lifecycle status, the money total
    and when it was created / last changed.
    """

    __tablename__ = "orders"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    # No FK constraint: orders are kept when the customer account is deleted.
    user_id: uuid.UUID | None = Field(
        default=None,
        index=True,
    )

    # pending | completed | cancelled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )

    total_amount: float = Field(
        default=0.0,
        ge=0,
        description="Final amount for this order",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last modification timestamp (UTC)",
    )
