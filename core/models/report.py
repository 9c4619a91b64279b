"""Financial and occupancy report models. Amounts in minor units."""

from datetime import date, datetime

from pydantic import BaseModel


class RevenueBreakdown(BaseModel):
    """Line item totals by type."""

    room: int = 0
    food: int = 0
    service: int = 0
    other: int = 0


class RevenueReport(BaseModel):
    """Bills created in a period and what was paid against them."""

    period_start: datetime | None = None
    period_end: datetime | None = None
    total_revenue_cents: int
    total_paid_cents: int
    pending_cents: int
    breakdown: RevenueBreakdown
    bill_count: int


class OverallReport(RevenueReport):
    """All-time revenue against vendor bills and operating expenses."""

    total_vendor_expenses_cents: int
    total_operating_expenses_cents: int
    net_profit_cents: int


class DailyRevenue(BaseModel):
    """One day in the weekly revenue series."""

    name: str
    day: date
    revenue_cents: int


class OccupancyReport(BaseModel):
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    occupancy_rate: int
    check_ins_today: int
    check_outs_today: int
