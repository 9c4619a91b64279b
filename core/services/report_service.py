"""
Report service for revenue and occupancy.

Day and month boundaries are taken in the hotel's timezone; stored
timestamps stay UTC. The aggregation itself lives in module-level
functions so it can be checked without a database.
"""

import logging
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from clients.postgres_client import PostgresClient
from core.config import BillingConfig
from core.models import (
    LineItemType, RoomStatus,
    RevenueBreakdown, RevenueReport, OverallReport, DailyRevenue, OccupancyReport,
)
from core.services.room_service import occupancy_rate
from utils.timezone import local_day_bounds, local_month_bounds, local_today, to_local

logger = logging.getLogger(__name__)


def summarize_revenue(
    bill_totals: Iterable[int],
    item_totals: Iterable[tuple[str, int]],
    payment_amounts: Iterable[int],
    period_start: datetime | None = None,
    period_end: datetime | None = None,
) -> RevenueReport:
    """
    Revenue figures for a set of bills.

    Args:
        bill_totals: total_cents of each bill
        item_totals: (line item type, total_cents) across those bills
        payment_amounts: amount_cents of every payment on those bills
    """
    totals = list(bill_totals)
    revenue = sum(totals)
    paid = sum(payment_amounts)

    breakdown = RevenueBreakdown()
    for item_type, amount in item_totals:
        field = LineItemType(item_type).value.lower()
        setattr(breakdown, field, getattr(breakdown, field) + amount)

    return RevenueReport(
        period_start=period_start,
        period_end=period_end,
        total_revenue_cents=revenue,
        total_paid_cents=paid,
        pending_cents=revenue - paid,
        breakdown=breakdown,
        bill_count=len(totals),
    )


def weekly_series(
    end_day: date,
    bills: Iterable[tuple[datetime, int]],
    tz_name: str,
) -> list[DailyRevenue]:
    """
    Revenue for the seven local days ending on end_day, oldest first.

    Args:
        bills: (created_at UTC, total_cents) pairs
    """
    days = [end_day - timedelta(days=offset) for offset in range(6, -1, -1)]
    per_day = {day: 0 for day in days}

    for created_at, total in bills:
        local_day = to_local(created_at, tz_name).date()
        if local_day in per_day:
            per_day[local_day] += total

    return [
        DailyRevenue(name=day.strftime("%a"), day=day, revenue_cents=per_day[day])
        for day in days
    ]


class ReportService:
    """Service for back-office reports."""

    def __init__(self, postgres: PostgresClient, config: BillingConfig):
        self.postgres = postgres
        self.config = config

    def _revenue(self, start: datetime | None, end: datetime | None) -> RevenueReport:
        params = (start, start, end, end)
        in_range = """
            (%s::timestamptz IS NULL OR b.created_at >= %s)
            AND (%s::timestamptz IS NULL OR b.created_at < %s)
        """

        bills = self.postgres.execute(
            f"SELECT b.total_cents FROM bills b WHERE {in_range}",
            params
        )
        items = self.postgres.execute(
            f"""
            SELECT i.type, SUM(i.total_cents) AS total
            FROM bill_items i
            JOIN bills b ON b.id = i.bill_id
            WHERE {in_range}
            GROUP BY i.type
            """,
            params
        )
        paid = self.postgres.execute_scalar(
            f"""
            SELECT COALESCE(SUM(p.amount_cents), 0)
            FROM payments p
            JOIN bills b ON b.id = p.bill_id
            WHERE {in_range}
            """,
            params
        )

        return summarize_revenue(
            (row["total_cents"] for row in bills),
            ((row["type"], int(row["total"])) for row in items),
            [int(paid or 0)],
            period_start=start,
            period_end=end,
        )

    def daily(self, day: date | None = None) -> RevenueReport:
        day = day or local_today(self.config.timezone)
        start, end = local_day_bounds(day, self.config.timezone)
        return self._revenue(start, end)

    def monthly(self, day: date | None = None) -> RevenueReport:
        day = day or local_today(self.config.timezone)
        start, end = local_month_bounds(day, self.config.timezone)
        return self._revenue(start, end)

    def overall(self) -> OverallReport:
        """All-time revenue with vendor bills, expenses and net profit."""
        revenue = self._revenue(None, None)

        vendor_bills = self.postgres.execute_scalar(
            "SELECT COALESCE(SUM(amount_cents), 0) FROM vendor_transactions WHERE type = %s",
            ("BILL_RECEIVED",)
        )
        expenses = self.postgres.execute_scalar(
            "SELECT COALESCE(SUM(amount_cents), 0) FROM expenses"
        )
        vendor_bills = int(vendor_bills or 0)
        expenses = int(expenses or 0)

        return OverallReport(
            **revenue.model_dump(),
            total_vendor_expenses_cents=vendor_bills,
            total_operating_expenses_cents=expenses,
            net_profit_cents=revenue.total_revenue_cents - vendor_bills - expenses,
        )

    def weekly(self, day: date | None = None) -> list[DailyRevenue]:
        day = day or local_today(self.config.timezone)
        start, _ = local_day_bounds(day - timedelta(days=6), self.config.timezone)
        _, end = local_day_bounds(day, self.config.timezone)

        rows = self.postgres.execute(
            "SELECT created_at, total_cents FROM bills WHERE created_at >= %s AND created_at < %s",
            (start, end)
        )
        return weekly_series(
            day,
            ((row["created_at"], row["total_cents"]) for row in rows),
            self.config.timezone,
        )

    def occupancy(self) -> OccupancyReport:
        """Room counts now, plus check-ins and check-outs during today."""
        counts = {
            row["status"]: row["count"]
            for row in self.postgres.execute("SELECT status, COUNT(*) AS count FROM rooms GROUP BY status")
        }
        total = sum(counts.values())
        occupied = counts.get(RoomStatus.OCCUPIED.value, 0)

        start, end = local_day_bounds(local_today(self.config.timezone), self.config.timezone)
        check_ins = self.postgres.execute_scalar(
            "SELECT COUNT(*) FROM stays WHERE check_in_at >= %s AND check_in_at < %s",
            (start, end)
        )
        check_outs = self.postgres.execute_scalar(
            "SELECT COUNT(*) FROM stays WHERE actual_check_out_at >= %s AND actual_check_out_at < %s",
            (start, end)
        )

        return OccupancyReport(
            total_rooms=total,
            occupied_rooms=occupied,
            available_rooms=counts.get(RoomStatus.AVAILABLE.value, 0),
            occupancy_rate=occupancy_rate(occupied, total),
            check_ins_today=check_ins or 0,
            check_outs_today=check_outs or 0,
        )
