"""UTC-everywhere time handling. Hotel-local time only at report boundaries."""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

SECONDS_PER_HOUR = 3600


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def _zone(tz_name: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name)
    except (KeyError, ValueError):
        raise ValueError(f"Unknown timezone: {tz_name}")


def to_local(dt: datetime, tz_name: str) -> datetime:
    """
    Convert UTC datetime to the hotel's local timezone.

    ONLY use this at display and reporting boundaries.
    All stored timestamps remain in UTC.

    Args:
        dt: UTC datetime
        tz_name: IANA timezone name (e.g., "Asia/Karachi")

    Raises:
        ValueError: If datetime is naive or timezone name is invalid
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )

    return dt.astimezone(_zone(tz_name))


def local_day_bounds(day: date, tz_name: str) -> tuple[datetime, datetime]:
    """
    UTC half-open range [start, end) covering one local calendar day.

    A local day is not always 24h long (DST), so both ends are computed
    from local midnight rather than by adding a fixed delta.
    """
    zone = _zone(tz_name)
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone)
    return to_utc(start), to_utc(end)


def local_month_bounds(day: date, tz_name: str) -> tuple[datetime, datetime]:
    """UTC half-open range covering the local calendar month containing day."""
    first = day.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)

    start, _ = local_day_bounds(first, tz_name)
    end, _ = local_day_bounds(next_first, tz_name)
    return start, end


def local_today(tz_name: str) -> date:
    """Today's date in the hotel's timezone."""
    return to_local(now_utc(), tz_name).date()


def hours_between(start: datetime, end: datetime) -> float:
    """Fractional hours from start to end (negative if end is earlier)."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR
