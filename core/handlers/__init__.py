"""Event handlers and their wiring."""

from core.event_bus import EventBus
from core.handlers.reservation_sync_handler import (
    handle_guest_checked_in,
    handle_guest_checked_out,
)
from core.store.base import RecordStore


def register_handlers(event_bus: EventBus, store: RecordStore) -> None:
    """Subscribe every handler to the bus."""
    event_bus.subscribe("GuestCheckedIn", handle_guest_checked_in(store))
    event_bus.subscribe("GuestCheckedOut", handle_guest_checked_out(store))
