"""Tests for utils/timezone.py - UTC storage, hotel-local report boundaries."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from utils.timezone import (
    hours_between,
    local_day_bounds,
    local_month_bounds,
    now_utc,
    to_local,
    to_utc,
)


class TestNowUtc:

    def test_returns_utc_aware(self):
        result = now_utc()
        assert result.tzinfo == timezone.utc


class TestToUtc:

    def test_raises_on_naive(self):
        """Naive datetime must raise ValueError."""
        with pytest.raises(ValueError, match="naive"):
            to_utc(datetime(2024, 1, 1, 12, 0, 0))

    def test_converts_karachi(self):
        """Karachi 17:00 is UTC 12:00 (fixed +05:00)."""
        karachi = datetime(2024, 1, 1, 17, 0, 0, tzinfo=ZoneInfo("Asia/Karachi"))
        result = to_utc(karachi)
        assert result.tzinfo == timezone.utc
        assert result.hour == 12


class TestToLocal:

    def test_converts_correctly(self):
        result = to_local(datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc), "Asia/Karachi")
        assert (result.day, result.hour) == (2, 1)

    def test_raises_on_naive(self):
        with pytest.raises(ValueError, match="naive"):
            to_local(datetime(2024, 1, 1, 12, 0, 0), "Asia/Karachi")

    def test_raises_on_invalid_timezone(self):
        with pytest.raises(ValueError, match="Unknown timezone"):
            to_local(now_utc(), "Not/A/Timezone")


class TestLocalDayBounds:

    def test_karachi_day_starts_at_previous_utc_evening(self):
        start, end = local_day_bounds(date(2025, 3, 9), "Asia/Karachi")

        assert start == datetime(2025, 3, 8, 19, 0, tzinfo=timezone.utc)
        assert end == datetime(2025, 3, 9, 19, 0, tzinfo=timezone.utc)

    def test_dst_day_is_23_hours(self):
        """Spring-forward day in Chicago is one hour short."""
        start, end = local_day_bounds(date(2024, 3, 10), "America/Chicago")

        assert end - start == timedelta(hours=23)


class TestLocalMonthBounds:

    def test_mid_month_day_maps_to_whole_month(self):
        start, end = local_month_bounds(date(2025, 2, 14), "UTC")

        assert start == datetime(2025, 2, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 3, 1, tzinfo=timezone.utc)

    def test_december_rolls_into_next_year(self):
        start, end = local_month_bounds(date(2024, 12, 31), "UTC")

        assert start == datetime(2024, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestHoursBetween:

    def test_fractional(self):
        start = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

        assert hours_between(start, start + timedelta(hours=2, minutes=30)) == 2.5

    def test_negative_when_reversed(self):
        start = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

        assert hours_between(start, start - timedelta(hours=1)) == -1
