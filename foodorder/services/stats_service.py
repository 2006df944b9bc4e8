# foodorder/services/stats_service.py
import logging
from datetime import datetime, timedelta, timezone

from sqlmodel import Session

from foodorder.core.errors import AggregationError, store_errors
from foodorder.repositories.stats_repo import StatsRepository
from foodorder.schemas.stats import SERIES_DAYS, OrderCounts, StatsReport

logger = logging.getLogger(__name__)

# Statuses counted on the dashboard; anything else is ignored.
COUNTED_STATUSES = ("completed", "pending", "cancelled")


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.

    All dates are UTC: orders are stored with UTC created_at, the store
    buckets them by that value, and the seven series keys are built from
    the current UTC date.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def compute_stats(
        self,
        session: Session,
        now: datetime | None = None,
    ) -> StatsReport:
        """
        Build a fresh StatsReport from the current orders table.

        Steps:
          1. Count orders per recognised status (case-insensitive).
          2. Sum revenue of completed orders.
          3. Fill the trailing 7-day revenue / order-count series.

        Raises:
            AggregationError: if any of the aggregate queries fails.
        """
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        logger.info("Fetching admin stats")

        # Malformed rows surface as TypeError / ValueError during conversion.
        with store_errors(
            "Failed to fetch stats", AggregationError, also=(TypeError, ValueError)
        ):
            status_rows = self.repo.count_by_status(session)
            total_revenue = self.repo.completed_revenue(session)
            daily_rows = self.repo.daily_completed_since(
                session, since=now - timedelta(days=7)
            )

        report = StatsReport(
            orders=self._order_counts(status_rows),
            total_revenue=total_revenue,
        )
        self._fill_daily_series(report, daily_rows, today=now.date())

        logger.info(
            f"Stats fetched: {report.orders.total} orders, "
            f"revenue {report.total_revenue:.2f}"
        )
        return report

    @staticmethod
    def _order_counts(rows: list[tuple[str, int]]) -> OrderCounts:
        counts = dict.fromkeys(COUNTED_STATUSES, 0)
        for status, count in rows:
            # Unknown statuses (e.g. "refunded") are dropped, also from total.
            if status in counts:
                counts[status] += count
        return OrderCounts(total=sum(counts.values()), **counts)

    @staticmethod
    def _fill_daily_series(
        report: StatsReport,
        rows: list[tuple[str, float, int]],
        today,
    ) -> None:
        """
        Copy day groups into the fixed 7-slot series.

        Slot i holds the day `today - (6 - i)`. Groups are matched on the
        exact "YYYY-MM-DD" key; a group outside those seven days (the
        partial eighth day at the window edge) is dropped.
        """
        by_day = {day: (revenue, count) for day, revenue, count in rows}
        for i in range(SERIES_DAYS):
            day_key = (today - timedelta(days=SERIES_DAYS - 1 - i)).isoformat()
            if day_key in by_day:
                revenue, count = by_day[day_key]
                report.daily_revenue[i] = revenue
                report.daily_orders[i] = count
