# foodorder/repositories/stats_repo.py
from datetime import datetime

from sqlalchemy import func
from sqlmodel import Session, select

from foodorder.models.order import Order


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.

    Status matching is case-insensitive: rows are compared on
    lower(status), so "Completed" and "completed" land in one group.
    """

    def count_by_status(self, session: Session) -> list[tuple[str, int]]:
        """
        Order count per lower-cased status, including statuses the
        dashboard does not know about.
        """
        status_expr = func.lower(Order.status)
        stmt = select(
            status_expr.label("status"),
            func.count(Order.id).label("count"),
        ).group_by(status_expr)
        return [(status, int(count or 0)) for status, count in session.exec(stmt).all()]

    def completed_revenue(self, session: Session) -> float:
        """
        Sum of total_amount for all completed orders (0.0 if none).
        """
        stmt = select(func.coalesce(func.sum(Order.total_amount), 0.0)).where(
            func.lower(Order.status) == "completed"
        )
        value = session.exec(stmt).one()
        return float(value or 0.0)

    def daily_completed_since(
        self,
        session: Session,
        since: datetime,
    ) -> list[tuple[str, float, int]]:
        """
        Revenue and order count per calendar day for completed orders
        created at or after `since`.

        Days are bucketed on the stored (UTC) created_at and returned as
        "YYYY-MM-DD" strings, oldest first.
        """
        day_expr = func.date(Order.created_at)

        stmt = (
            select(
                day_expr.label("day"),
                func.coalesce(func.sum(Order.total_amount), 0.0).label("revenue"),
                func.count(Order.id).label("order_count"),
            )
            .where(
                func.lower(Order.status) == "completed",
                Order.created_at >= since,
            )
            .group_by(day_expr)
            .order_by(day_expr)
        )

        # Postgres returns a date, SQLite a string; both render as YYYY-MM-DD.
        return [
            (str(day), float(revenue or 0.0), int(order_count or 0))
            for day, revenue, order_count in session.exec(stmt).all()
        ]
