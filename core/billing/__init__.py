"""Stay billing: rules and the engine that applies them."""

from core.billing.rules import (
    count_nights,
    is_late,
    late_charge,
    derive_status,
    compute_totals,
    room_line_description,
)
from core.billing.engine import StayBillingEngine
