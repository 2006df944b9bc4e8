# foodorder/schemas/stats.py
from pydantic import Field

from foodorder.schemas.common import CamelModel

# Days covered by the dashboard series, today included
SERIES_DAYS = 7


class OrderCounts(CamelModel):
    """
    Order counts by recognised status.

    `total` is the sum of the three buckets, not a raw row count.
    """

    total: int = 0
    completed: int = 0
    pending: int = 0
    cancelled: int = 0


class StatsReport(CamelModel):
    """
    Full payload for the admin dashboard.

    daily_revenue / daily_orders: index 0 is six days ago, index 6 is today.
    """

    orders: OrderCounts = Field(default_factory=OrderCounts)
    total_revenue: float = 0.0
    daily_revenue: list[float] = Field(
        default_factory=lambda: [0.0] * SERIES_DAYS,
        min_length=SERIES_DAYS,
        max_length=SERIES_DAYS,
    )
    daily_orders: list[int] = Field(
        default_factory=lambda: [0] * SERIES_DAYS,
        min_length=SERIES_DAYS,
        max_length=SERIES_DAYS,
    )


class StatsResponse(CamelModel):
    success: bool = True
    stats: StatsReport
