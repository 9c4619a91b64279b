"""
Room service for categories, rooms and the availability dashboard.
"""

import logging
from uuid import UUID, uuid4

import psycopg2.errors

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.exceptions import ConflictError, NotFoundError
from core.models import (
    Room, RoomCreate, RoomUpdate, RoomStatus, RoomAvailability,
    RoomCategory, RoomCategoryCreate,
)
from core.services.base import update_columns
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"room_number", "category_id", "floor", "status"}

ROOM_SELECT = """
    SELECT r.*, c.name AS category_name, c.base_price_cents
    FROM rooms r
    JOIN room_categories c ON c.id = r.category_id
"""


def occupancy_rate(occupied: int, total: int) -> int:
    """Occupied share of all rooms, as a whole percent."""
    if total <= 0:
        return 0
    return (occupied * 200 + total) // (total * 2)


def summarize_availability(rooms: list[Room]) -> RoomAvailability:
    """Group rooms by status and count each group."""
    grouped = {status: [] for status in RoomStatus}
    for room in rooms:
        grouped[room.status].append(room)

    total = len(rooms)
    occupied = len(grouped[RoomStatus.OCCUPIED])

    return RoomAvailability(
        rooms=grouped,
        total=total,
        available=len(grouped[RoomStatus.AVAILABLE]),
        occupied=occupied,
        booked=len(grouped[RoomStatus.BOOKED]),
        cleaning=len(grouped[RoomStatus.CLEANING]),
        maintenance=len(grouped[RoomStatus.MAINTENANCE]),
        occupancy_rate=occupancy_rate(occupied, total),
    )


class RoomService:
    """Service for room inventory operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    def create_category(self, data: RoomCategoryCreate) -> RoomCategory:
        """
        Create a room category.

        Raises:
            ConflictError: If a category with the same name exists
        """
        now = now_utc()
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO room_categories (id, name, description, base_price_cents, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING *
                """,
                (uuid4(), data.name, data.description, data.base_price_cents, now, now)
            )[0]
        except psycopg2.errors.UniqueViolation as e:
            raise ConflictError(f"Room category '{data.name}' already exists") from e

        category = RoomCategory.model_validate(row)

        self.audit.log_change(
            entity_type="room_category",
            entity_id=category.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return category

    def list_categories(self) -> list[RoomCategory]:
        rows = self.postgres.execute("SELECT * FROM room_categories ORDER BY name ASC")
        return [RoomCategory.model_validate(row) for row in rows]

    # =========================================================================
    # ROOMS
    # =========================================================================

    def create(self, data: RoomCreate) -> Room:
        """
        Add a room.

        Raises:
            NotFoundError: If the category does not exist
            ConflictError: If the room number is taken
        """
        category = self.postgres.execute_scalar(
            "SELECT id FROM room_categories WHERE id = %s",
            (data.category_id,)
        )
        if category is None:
            raise NotFoundError("Room category", data.category_id)

        now = now_utc()
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO rooms (id, room_number, category_id, floor, status, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (uuid4(), data.room_number, data.category_id, data.floor, data.status, now, now)
            )[0]
        except psycopg2.errors.UniqueViolation as e:
            raise ConflictError(f"Room {data.room_number} already exists") from e

        room = self.get_by_id(row["id"])

        self.audit.log_change(
            entity_type="room",
            entity_id=room.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return room

    def get_by_id(self, room_id: UUID) -> Room | None:
        row = self.postgres.execute_single(ROOM_SELECT + " WHERE r.id = %s", (room_id,))
        return Room.model_validate(row) if row else None

    def update(self, room_id: UUID, data: RoomUpdate) -> Room:
        """
        Update room fields. Only non-None fields are changed.

        Raises:
            NotFoundError: If room not found
            ConflictError: If the new room number is taken
        """
        current = self.get_by_id(room_id)
        if current is None:
            raise NotFoundError("Room", room_id)

        updates = data.model_dump(mode="json", exclude_none=True)
        if not updates:
            return current

        try:
            row = update_columns(self.postgres, "rooms", room_id, updates, _UPDATABLE_COLUMNS)
        except psycopg2.errors.UniqueViolation as e:
            raise ConflictError(f"Room {updates.get('room_number')} already exists") from e
        if row is None:
            return current

        updated = self.get_by_id(room_id)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="room",
                entity_id=room_id,
                action=AuditAction.UPDATE,
                changes=changes
            )

        return updated

    def list_all(
        self,
        status: RoomStatus | None = None,
        category_id: UUID | None = None
    ) -> list[Room]:
        """Rooms ordered by number, optionally filtered by status and category."""
        rows = self.postgres.execute(
            ROOM_SELECT + """
            WHERE (%s::text IS NULL OR r.status = %s)
              AND (%s::uuid IS NULL OR r.category_id = %s)
            ORDER BY r.room_number ASC
            """,
            (status, status, category_id, category_id)
        )
        return [Room.model_validate(row) for row in rows]

    def availability(self) -> RoomAvailability:
        """Rooms grouped by status, with counts and occupancy rate."""
        return summarize_availability(self.list_all())
