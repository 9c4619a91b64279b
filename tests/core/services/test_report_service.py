"""Tests for report aggregation and room availability."""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from core.models import Room, RoomStatus
from core.services.report_service import summarize_revenue, weekly_series
from core.services.room_service import occupancy_rate, summarize_availability
from utils.timezone import now_utc


class TestSummarizeRevenue:

    def test_totals_and_pending(self):
        report = summarize_revenue(
            bill_totals=[10500, 3150],
            item_totals=[("ROOM", 10000), ("FOOD", 3000), ("OTHER", 0)],
            payment_amounts=[5000, 1000],
        )

        assert report.total_revenue_cents == 13650
        assert report.total_paid_cents == 6000
        assert report.pending_cents == 7650
        assert report.bill_count == 2

    def test_breakdown_by_line_type(self):
        report = summarize_revenue(
            bill_totals=[0],
            item_totals=[("ROOM", 10000), ("FOOD", 1200), ("SERVICE", 800), ("OTHER", 3750), ("FOOD", 300)],
            payment_amounts=[],
        )

        assert report.breakdown.room == 10000
        assert report.breakdown.food == 1500
        assert report.breakdown.service == 800
        assert report.breakdown.other == 3750

    def test_empty_period(self):
        start = datetime(2025, 1, 1, tzinfo=timezone.utc)
        report = summarize_revenue([], [], [], period_start=start)

        assert report.total_revenue_cents == 0
        assert report.pending_cents == 0
        assert report.bill_count == 0
        assert report.period_start == start

    def test_overpayment_makes_pending_negative(self):
        report = summarize_revenue([10500], [], [11000])

        assert report.pending_cents == -500


class TestWeeklySeries:

    def test_seven_days_oldest_first(self):
        series = weekly_series(date(2025, 3, 9), [], "UTC")

        assert len(series) == 7
        assert series[0].day == date(2025, 3, 3)
        assert series[-1].day == date(2025, 3, 9)
        assert series[-1].name == "Sun"
        assert all(d.revenue_cents == 0 for d in series)

    def test_buckets_by_local_day(self):
        # 20:00 UTC on the 8th is already the 9th in Karachi (UTC+5)
        late_evening = datetime(2025, 3, 8, 20, 0, tzinfo=timezone.utc)
        midday = datetime(2025, 3, 8, 7, 0, tzinfo=timezone.utc)

        series = weekly_series(
            date(2025, 3, 9), [(late_evening, 4000), (midday, 1500)], "Asia/Karachi"
        )
        by_day = {d.day: d.revenue_cents for d in series}

        assert by_day[date(2025, 3, 9)] == 4000
        assert by_day[date(2025, 3, 8)] == 1500

    def test_ignores_bills_outside_window(self):
        old = datetime(2025, 2, 1, 12, 0, tzinfo=timezone.utc)

        series = weekly_series(date(2025, 3, 9), [(old, 9999)], "UTC")

        assert sum(d.revenue_cents for d in series) == 0


class TestOccupancyRate:

    @pytest.mark.parametrize("occupied, total, expected", [
        (0, 10, 0),
        (5, 10, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (10, 10, 100),
        (0, 0, 0),
    ])
    def test_whole_percent_rounded(self, occupied, total, expected):
        assert occupancy_rate(occupied, total) == expected


class TestSummarizeAvailability:

    def _room(self, number, status):
        now = now_utc()
        return Room(
            id=uuid4(), room_number=number, category_id=uuid4(), floor=1,
            status=status, created_at=now, updated_at=now,
        )

    def test_groups_and_counts(self):
        rooms = [
            self._room("101", RoomStatus.AVAILABLE),
            self._room("102", RoomStatus.OCCUPIED),
            self._room("103", RoomStatus.OCCUPIED),
            self._room("104", RoomStatus.MAINTENANCE),
        ]

        summary = summarize_availability(rooms)

        assert summary.total == 4
        assert summary.available == 1
        assert summary.occupied == 2
        assert summary.maintenance == 1
        assert summary.booked == 0
        assert summary.occupancy_rate == 50
        assert [r.room_number for r in summary.rooms[RoomStatus.OCCUPIED]] == ["102", "103"]

    def test_every_status_present_even_when_empty(self):
        summary = summarize_availability([])

        assert set(summary.rooms) == set(RoomStatus)
        assert summary.occupancy_rate == 0
