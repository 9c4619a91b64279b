"""
Front desk service for check-in and check-out.

Orchestrates the room, the stay and the billing engine. Reservation status
follows through the event bus (see core/handlers/reservation_sync_handler).
"""

import logging
from datetime import datetime
from uuid import UUID

from core.audit import AuditLogger, AuditAction
from core.billing import StayBillingEngine
from core.event_bus import EventBus
from core.events import GuestCheckedIn, GuestCheckedOut
from core.exceptions import NotFoundError, RoomUnavailableError, ValidationError
from core.models import (
    Bill,
    CheckInRequest,
    CheckoutResult,
    RoomStatus,
    Stay, StayCreate,
)
from core.store.base import RecordStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class FrontDeskService:
    """Service for stay lifecycle operations."""

    def __init__(
        self,
        store: RecordStore,
        engine: StayBillingEngine,
        audit: AuditLogger,
        event_bus: EventBus,
    ):
        self.store = store
        self.engine = engine
        self.audit = audit
        self.event_bus = event_bus

    def check_in(self, request: CheckInRequest, now: datetime | None = None) -> tuple[Stay, Bill]:
        """
        Check a guest into a room and open their bill.

        With a reservation, missing guest, room, expected check-out and
        advance payment are filled from it.

        Returns:
            The new stay and its bill

        Raises:
            NotFoundError: If the reservation or room does not exist
            ValidationError: If guest, room or expected check-out is missing
            RoomUnavailableError: If the room is occupied or under maintenance
        """
        now = now or now_utc()

        guest_id = request.guest_id
        room_id = request.room_id
        expected_check_out = request.expected_check_out
        advance_cents = request.advance_payment_cents

        if request.reservation_id is not None:
            reservation = self.store.get_reservation(request.reservation_id)
            if reservation is None:
                raise NotFoundError("Reservation", request.reservation_id)

            guest_id = guest_id or reservation.guest_id
            room_id = room_id or reservation.room_id
            expected_check_out = expected_check_out or reservation.expected_check_out
            if advance_cents is None:
                advance_cents = reservation.advance_payment_cents

        if guest_id is None:
            raise ValidationError("Guest is required")
        if room_id is None:
            raise ValidationError("Room is required")
        if expected_check_out is None:
            raise ValidationError("Expected check-out is required")

        room = self.store.get_room(room_id)
        if room is None:
            raise NotFoundError("Room", room_id)
        if not room.accepts_check_in:
            raise RoomUnavailableError(room.room_number, room.status.value)

        with self.engine.unit_of_work():
            stay = self.store.create_stay(StayCreate(
                guest_id=guest_id,
                room_id=room_id,
                reservation_id=request.reservation_id,
                check_in_at=now,
                expected_check_out_at=expected_check_out,
                custom_rate_cents=request.custom_rate_cents,
            ))

            self.audit.log_change(
                entity_type="stay",
                entity_id=stay.id,
                action=AuditAction.CREATE,
                changes={"created": stay.model_dump(mode="json")}
            )

            self._set_room_status(room_id, room.status, RoomStatus.OCCUPIED)
            bill = self.engine.open(stay, advance_cents or 0)

        logger.info("Checked in guest %s to room %s (stay %s)", guest_id, room.room_number, stay.id)

        self.event_bus.publish(GuestCheckedIn.create(stay=stay, bill=bill))

        return stay, bill

    def check_out(self, stay_id: UUID, now: datetime | None = None) -> CheckoutResult:
        """
        Close the stay's bill and release the room.

        Raises:
            NotFoundError: If the stay does not exist
            AlreadyClosedError: If the stay is already checked out
        """
        with self.engine.unit_of_work():
            result = self.engine.close(stay_id, now)
            self._set_room_status(result.stay.room_id, RoomStatus.OCCUPIED, RoomStatus.AVAILABLE)

        logger.info("Checked out stay %s", stay_id)

        self.event_bus.publish(GuestCheckedOut.create(stay=result.stay, bill=result.bill))

        return result

    def get_stay(self, stay_id: UUID) -> Stay | None:
        return self.store.get_stay(stay_id)

    def list_stays(self, active_only: bool = False, limit: int = 100) -> list[Stay]:
        """Stays newest first; active means not yet checked out."""
        return self.store.list_stays(active_only=active_only, limit=limit)

    def _set_room_status(self, room_id: UUID, old: RoomStatus, new: RoomStatus) -> None:
        self.store.update_room_status(room_id, new)
        self.audit.log_change(
            entity_type="room",
            entity_id=room_id,
            action=AuditAction.UPDATE,
            changes={"status": {"old": old.value, "new": new.value}}
        )
