"""Propagate the acting staff member through the call stack using contextvars."""

from contextvars import ContextVar
from contextlib import contextmanager
from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class StaffMember:
    """Who is performing the current request."""

    user_id: UUID


_current_staff: ContextVar[StaffMember | None] = ContextVar("current_staff", default=None)


def get_current_user_id() -> UUID | None:
    """
    Acting user's ID, or None for system/unattributed work.

    The audit trail accepts unattributed entries, so this does not raise.
    """
    staff = _current_staff.get()
    return staff.user_id if staff is not None else None


def set_current_staff(staff: StaffMember) -> None:
    """
    Set the acting staff member.

    Called by StaffContextMiddleware once the gateway headers are parsed.
    """
    _current_staff.set(staff)


def clear_current_staff() -> None:
    """
    Clear staff context.

    Must be called in a finally block to prevent context leakage.
    """
    _current_staff.set(None)


@contextmanager
def staff_context(user_id: UUID):
    """
    Context manager for temporarily acting as a staff member.

    Useful for:
    - Tests
    - Maintenance scripts run on behalf of a person

    Example:
        with staff_context(frontdesk_id):
            front_desk.check_out(stay_id)
    """
    previous = _current_staff.get()
    set_current_staff(StaffMember(user_id=user_id))
    try:
        yield
    finally:
        if previous is None:
            clear_current_staff()
        else:
            set_current_staff(previous)
