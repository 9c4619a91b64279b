"""
Handlers for GuestCheckedIn and GuestCheckedOut events.

Keeps a stay's reservation status in step with the front desk: CHECKED_IN
when the guest arrives, CHECKED_OUT when they leave.
"""

import logging
from typing import Callable

from core.events import GuestCheckedIn, GuestCheckedOut
from core.models import ReservationStatus
from core.store.base import RecordStore

logger = logging.getLogger(__name__)


def _sync(store: RecordStore, stay, status: ReservationStatus) -> None:
    if stay.reservation_id is None:
        return

    store.update_reservation_status(stay.reservation_id, status)
    logger.info("Reservation %s marked %s", stay.reservation_id, status.value)


def handle_guest_checked_in(store: RecordStore) -> Callable:
    """
    Factory that returns a GuestCheckedIn handler.

    Args:
        store: RecordStore holding the reservation

    Returns:
        Handler callable that marks the reservation CHECKED_IN
    """

    def handler(event: GuestCheckedIn):
        _sync(store, event.stay, ReservationStatus.CHECKED_IN)

    return handler


def handle_guest_checked_out(store: RecordStore) -> Callable:
    """Factory that returns a GuestCheckedOut handler marking the reservation CHECKED_OUT."""

    def handler(event: GuestCheckedOut):
        _sync(store, event.stay, ReservationStatus.CHECKED_OUT)

    return handler
