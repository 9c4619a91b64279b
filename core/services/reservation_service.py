"""
Reservation service.

Booking a room marks it BOOKED. Cancelling a reservation that never
checked in frees the room again.
"""

import logging
from uuid import UUID, uuid4

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.exceptions import NotFoundError, RoomUnavailableError
from core.models import (
    Reservation, ReservationCreate, ReservationUpdate, ReservationStatus,
    RoomStatus,
)
from core.services.base import update_columns
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"status", "notes"}


class ReservationService:
    """Service for reservation operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    def _set_room_status(self, room_id: UUID, status: RoomStatus) -> None:
        self.postgres.execute(
            "UPDATE rooms SET status = %s, updated_at = %s WHERE id = %s",
            (status, now_utc(), room_id)
        )

    def create(self, data: ReservationCreate) -> Reservation:
        """
        Book a room for a guest.

        Raises:
            NotFoundError: If guest or room not found
            RoomUnavailableError: If the room is not AVAILABLE
        """
        guest = self.postgres.execute_scalar(
            "SELECT id FROM guests WHERE id = %s",
            (data.guest_id,)
        )
        if guest is None:
            raise NotFoundError("Guest", data.guest_id)

        room = self.postgres.execute_single(
            "SELECT room_number, status FROM rooms WHERE id = %s",
            (data.room_id,)
        )
        if room is None:
            raise NotFoundError("Room", data.room_id)
        if room["status"] != RoomStatus.AVAILABLE.value:
            raise RoomUnavailableError(room["room_number"], room["status"])

        now = now_utc()
        with self.postgres.transaction():
            row = self.postgres.execute_returning(
                """
                INSERT INTO reservations (
                    id, guest_id, room_id, check_in_date, expected_check_out,
                    advance_payment_cents, notes, status, created_at, updated_at
                ) VALUES (
                    %s, %s, %s, %s, %s,
                    %s, %s, %s, %s, %s
                )
                RETURNING *
                """,
                (
                    uuid4(), data.guest_id, data.room_id, data.check_in_date, data.expected_check_out,
                    data.advance_payment_cents, data.notes, ReservationStatus.RESERVED, now, now
                )
            )[0]
            self._set_room_status(data.room_id, RoomStatus.BOOKED)

        reservation = Reservation.model_validate(row)

        self.audit.log_change(
            entity_type="reservation",
            entity_id=reservation.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        logger.info("Room %s booked (reservation %s)", room["room_number"], reservation.id)

        return reservation

    def get_by_id(self, reservation_id: UUID) -> Reservation | None:
        row = self.postgres.execute_single(
            "SELECT * FROM reservations WHERE id = %s",
            (reservation_id,)
        )
        return Reservation.model_validate(row) if row else None

    def update(self, reservation_id: UUID, data: ReservationUpdate) -> Reservation:
        """
        Change status and/or notes.

        Raises:
            NotFoundError: If reservation not found
        """
        current = self.get_by_id(reservation_id)
        if current is None:
            raise NotFoundError("Reservation", reservation_id)

        updates = data.model_dump(mode="json", exclude_none=True)
        if not updates:
            return current

        with self.postgres.transaction():
            row = update_columns(
                self.postgres, "reservations", reservation_id, updates, _UPDATABLE_COLUMNS
            )
            if row is None:
                return current

            if (
                data.status == ReservationStatus.CANCELLED
                and current.status != ReservationStatus.CHECKED_IN
            ):
                self._set_room_status(current.room_id, RoomStatus.AVAILABLE)

        updated = Reservation.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="reservation",
                entity_id=reservation_id,
                action=AuditAction.UPDATE,
                changes=changes
            )

        return updated

    def list_all(
        self,
        status: ReservationStatus | None = None,
        guest_id: UUID | None = None,
        limit: int = 100
    ) -> list[Reservation]:
        """Reservations by check-in date, latest first."""
        rows = self.postgres.execute(
            """
            SELECT * FROM reservations
            WHERE (%s::text IS NULL OR status = %s)
              AND (%s::uuid IS NULL OR guest_id = %s)
            ORDER BY check_in_date DESC
            LIMIT %s
            """,
            (status, status, guest_id, guest_id, limit)
        )
        return [Reservation.model_validate(row) for row in rows]
