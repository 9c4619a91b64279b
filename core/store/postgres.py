"""
PostgreSQL implementation of the record store.

Driver failures surface as InternalError with the psycopg2 error chained.
"""

import functools
import logging
from datetime import datetime
from uuid import UUID, uuid4

import psycopg2

from clients.postgres_client import PostgresClient
from core.exceptions import InternalError, NotFoundError
from core.models import (
    Bill, BillCreate, BillStatus, BillTotals,
    CatalogItem,
    LineItem, LineItemCreate,
    Payment, PaymentCreate,
    Reservation, ReservationStatus,
    Room, RoomStatus,
    Stay, StayCreate,
)
from core.store.base import RecordStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

ROOM_SELECT = """
    SELECT r.*, c.name AS category_name, c.base_price_cents
    FROM rooms r
    JOIN room_categories c ON c.id = r.category_id
"""


def _store_operation(method):
    """Translate driver errors into InternalError."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except psycopg2.Error as e:
            logger.error("Record store %s failed: %s", method.__name__, e)
            raise InternalError(f"Record store failed during {method.__name__}") from e

    return wrapper


class PostgresRecordStore(RecordStore):
    """RecordStore over PostgresClient."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def transaction(self):
        return self.postgres.transaction()

    # -- stays ---------------------------------------------------------------

    @_store_operation
    def get_stay(self, stay_id: UUID) -> Stay | None:
        row = self.postgres.execute_single(
            "SELECT * FROM stays WHERE id = %s",
            (stay_id,)
        )
        return Stay.model_validate(row) if row else None

    @_store_operation
    def list_stays(self, active_only: bool = False, limit: int = 100) -> list[Stay]:
        rows = self.postgres.execute(
            """
            SELECT * FROM stays
            WHERE (%s = false OR actual_check_out_at IS NULL)
            ORDER BY check_in_at DESC
            LIMIT %s
            """,
            (active_only, limit)
        )
        return [Stay.model_validate(row) for row in rows]

    @_store_operation
    def create_stay(self, data: StayCreate) -> Stay:
        now = now_utc()
        row = self.postgres.execute_returning(
            """
            INSERT INTO stays (
                id, guest_id, room_id, reservation_id,
                custom_rate_cents, check_in_at, expected_check_out_at,
                actual_check_out_at, late_checkout, late_charges_cents,
                created_at, updated_at
            ) VALUES (
                %s, %s, %s, %s,
                %s, %s, %s,
                NULL, false, 0,
                %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), data.guest_id, data.room_id, data.reservation_id,
                data.custom_rate_cents, data.check_in_at, data.expected_check_out_at,
                now, now
            )
        )[0]
        return Stay.model_validate(row)

    @_store_operation
    def close_stay(
        self,
        stay_id: UUID,
        actual_check_out_at: datetime,
        late_checkout: bool,
        late_charges_cents: int,
    ) -> Stay | None:
        row = self.postgres.execute_single(
            """
            UPDATE stays
            SET actual_check_out_at = %s, late_checkout = %s,
                late_charges_cents = %s, updated_at = %s
            WHERE id = %s AND actual_check_out_at IS NULL
            RETURNING *
            """,
            (actual_check_out_at, late_checkout, late_charges_cents, now_utc(), stay_id)
        )
        return Stay.model_validate(row) if row else None

    # -- rooms and reservations ----------------------------------------------

    @_store_operation
    def get_room(self, room_id: UUID) -> Room | None:
        row = self.postgres.execute_single(
            ROOM_SELECT + " WHERE r.id = %s",
            (room_id,)
        )
        return Room.model_validate(row) if row else None

    @_store_operation
    def update_room_status(self, room_id: UUID, status: RoomStatus) -> Room:
        updated = self.postgres.execute_returning(
            "UPDATE rooms SET status = %s, updated_at = %s WHERE id = %s RETURNING id",
            (status.value, now_utc(), room_id)
        )
        if not updated:
            raise NotFoundError("Room", room_id)
        return self.get_room(room_id)

    @_store_operation
    def get_reservation(self, reservation_id: UUID) -> Reservation | None:
        row = self.postgres.execute_single(
            "SELECT * FROM reservations WHERE id = %s",
            (reservation_id,)
        )
        return Reservation.model_validate(row) if row else None

    @_store_operation
    def update_reservation_status(
        self, reservation_id: UUID, status: ReservationStatus
    ) -> Reservation:
        rows = self.postgres.execute_returning(
            """
            UPDATE reservations SET status = %s, updated_at = %s
            WHERE id = %s
            RETURNING *
            """,
            (status.value, now_utc(), reservation_id)
        )
        if not rows:
            raise NotFoundError("Reservation", reservation_id)
        return Reservation.model_validate(rows[0])

    # -- bills ---------------------------------------------------------------

    def _generate_bill_number(self) -> str:
        """
        Next bill number for today.

        Format: INV-YYYYMMDD-XXXX where XXXX is a daily sequence number.
        """
        today = now_utc().strftime("%Y%m%d")
        prefix = f"INV-{today}-"

        latest = self.postgres.execute_scalar(
            """
            SELECT bill_number FROM bills
            WHERE bill_number LIKE %s
            ORDER BY bill_number DESC
            LIMIT 1
            """,
            (f"{prefix}%",)
        )

        if latest is None:
            sequence = 1
        else:
            try:
                sequence = int(latest.split("-")[-1]) + 1
            except (ValueError, IndexError):
                sequence = 1

        return f"{prefix}{sequence:04d}"

    @_store_operation
    def get_bill(self, bill_id: UUID) -> Bill | None:
        row = self.postgres.execute_single(
            "SELECT * FROM bills WHERE id = %s",
            (bill_id,)
        )
        return Bill.model_validate(row) if row else None

    @_store_operation
    def find_bill_by_stay(self, stay_id: UUID) -> Bill | None:
        row = self.postgres.execute_single(
            "SELECT * FROM bills WHERE stay_id = %s ORDER BY created_at ASC LIMIT 1",
            (stay_id,)
        )
        return Bill.model_validate(row) if row else None

    @_store_operation
    def create_bill(self, data: BillCreate) -> Bill:
        now = now_utc()
        row = self.postgres.execute_returning(
            """
            INSERT INTO bills (
                id, bill_number, guest_id, stay_id,
                subtotal_cents, tax_cents, total_cents, status,
                created_at, updated_at
            ) VALUES (
                %s, %s, %s, %s,
                0, 0, 0, %s,
                %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), self._generate_bill_number(), data.guest_id, data.stay_id,
                BillStatus.UNPAID.value,
                now, now
            )
        )[0]
        return Bill.model_validate(row)

    @_store_operation
    def update_bill(self, bill_id: UUID, totals: BillTotals) -> Bill:
        rows = self.postgres.execute_returning(
            """
            UPDATE bills
            SET subtotal_cents = %s, tax_cents = %s, total_cents = %s,
                status = %s, updated_at = %s
            WHERE id = %s
            RETURNING *
            """,
            (
                totals.subtotal_cents, totals.tax_cents, totals.total_cents,
                totals.status.value, now_utc(), bill_id
            )
        )
        if not rows:
            raise NotFoundError("Bill", bill_id)
        return Bill.model_validate(rows[0])

    @_store_operation
    def create_line_item(self, data: LineItemCreate) -> LineItem:
        row = self.postgres.execute_returning(
            """
            INSERT INTO bill_items (
                id, bill_id, type, description,
                quantity, unit_price_cents, total_cents,
                room_id, catalog_item_id, created_at
            ) VALUES (
                %s, %s, %s, %s,
                %s, %s, %s,
                %s, %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), data.bill_id, data.type.value, data.description,
                data.quantity, data.unit_price_cents, data.total_cents,
                data.room_id, data.catalog_item_id, now_utc()
            )
        )[0]
        return LineItem.model_validate(row)

    @_store_operation
    def list_line_items(self, bill_id: UUID) -> list[LineItem]:
        rows = self.postgres.execute(
            "SELECT * FROM bill_items WHERE bill_id = %s ORDER BY created_at ASC",
            (bill_id,)
        )
        return [LineItem.model_validate(row) for row in rows]

    @_store_operation
    def create_payment(self, data: PaymentCreate) -> Payment:
        row = self.postgres.execute_returning(
            """
            INSERT INTO payments (id, bill_id, amount_cents, method, note, paid_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING *
            """,
            (uuid4(), data.bill_id, data.amount_cents, data.method.value, data.note, now_utc())
        )[0]
        return Payment.model_validate(row)

    @_store_operation
    def list_payments(self, bill_id: UUID) -> list[Payment]:
        rows = self.postgres.execute(
            "SELECT * FROM payments WHERE bill_id = %s ORDER BY paid_at ASC",
            (bill_id,)
        )
        return [Payment.model_validate(row) for row in rows]

    # -- catalog -------------------------------------------------------------

    @_store_operation
    def get_catalog_item(self, item_id: UUID) -> CatalogItem | None:
        row = self.postgres.execute_single(
            "SELECT * FROM catalog_items WHERE id = %s",
            (item_id,)
        )
        return CatalogItem.model_validate(row) if row else None
