"""
Stay billing arithmetic.

Pure functions, no I/O. Amounts are integer minor units; fractional
results (tax, late tiers) round half up to the nearest unit.
"""

from datetime import datetime, timedelta
from typing import Iterable

from core.config import BillingConfig
from core.models import BillStatus, BillTotals
from utils.timezone import hours_between

_ONE_NIGHT = timedelta(days=1)


def _apply_bps(amount: int, bps: int) -> int:
    return (amount * bps + 5000) // 10000


def _apply_percent(amount: int, percent: int) -> int:
    return (amount * percent + 50) // 100


def count_nights(check_in: datetime, check_out: datetime) -> int:
    """
    Nights billed for a stay.

    Any started 24h block counts as a night, and every stay bills at least
    one night: 0h and 23h59m are 1 night, 24h00m01s is 2.
    """
    duration = check_out - check_in
    nights = -((-duration) // _ONE_NIGHT)
    return max(1, nights)


def is_late(expected_check_out: datetime, actual_check_out: datetime) -> bool:
    """Strictly after the expected instant, not the expected date."""
    return actual_check_out > expected_check_out


def late_charge(
    expected_check_out: datetime,
    actual_check_out: datetime,
    nightly_rate_cents: int,
    config: BillingConfig,
) -> int:
    """
    Late checkout surcharge for the tier the delay falls into.

    Tier bounds are inclusive on the upper side: exactly 2h late is free,
    exactly 6h late is still the first tier.
    """
    if not is_late(expected_check_out, actual_check_out):
        return 0

    hours_late = hours_between(expected_check_out, actual_check_out)
    if hours_late <= config.grace_period_hours:
        return 0
    if hours_late <= config.first_tier_hours:
        return _apply_percent(nightly_rate_cents, config.first_tier_percent)
    return _apply_percent(nightly_rate_cents, config.second_tier_percent)


def derive_status(total_cents: int, total_paid_cents: int) -> BillStatus:
    """
    Payment status from what is owed and what was paid.

    A bill with no charges yet but money on file (an advance taken at
    check-in) reads PARTIALLY_PAID: the final total is not known.
    Overpayment is PAID.
    """
    if total_paid_cents <= 0:
        return BillStatus.UNPAID
    if total_cents == 0:
        return BillStatus.PARTIALLY_PAID
    if total_paid_cents >= total_cents:
        return BillStatus.PAID
    return BillStatus.PARTIALLY_PAID


def compute_totals(
    line_totals: Iterable[int],
    payment_amounts: Iterable[int],
    config: BillingConfig,
) -> BillTotals:
    """Subtotal, tax, total and status from a bill's items and payments."""
    subtotal = sum(line_totals)
    tax = _apply_bps(subtotal, config.tax_rate_bps)
    total = subtotal + tax
    return BillTotals(
        subtotal_cents=subtotal,
        tax_cents=tax,
        total_cents=total,
        status=derive_status(total, sum(payment_amounts)),
    )


def format_amount(cents: int) -> str:
    """1234567 -> '12,345.67'"""
    return f"{cents / 100:,.2f}"


def room_line_description(
    category_name: str | None,
    room_number: str,
    nights: int,
    custom_rate_cents: int | None = None,
) -> str:
    """e.g. 'Deluxe Suite - Room 104 (3 nights) (Custom Rate: 9,000.00)'"""
    label = f"Room {room_number}"
    if category_name:
        label = f"{category_name} - {label}"

    plural = "s" if nights > 1 else ""
    description = f"{label} ({nights} night{plural})"

    if custom_rate_cents is not None:
        description += f" (Custom Rate: {format_amount(custom_rate_cents)})"
    return description
