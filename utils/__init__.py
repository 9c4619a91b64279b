"""Utility modules for cross-cutting concerns."""

from utils.timezone import (
    now_utc,
    to_utc,
    to_local,
    local_day_bounds,
    local_month_bounds,
    local_today,
    hours_between,
)
from utils.user_context import (
    StaffMember,
    get_current_user_id,
    set_current_staff,
    clear_current_staff,
    staff_context,
)
