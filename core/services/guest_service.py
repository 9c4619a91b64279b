"""
Guest service for the guest registry.

CNIC and passport numbers identify a guest, so each may belong to at most
one guest record.
"""

import logging
from uuid import UUID, uuid4

import psycopg2.errors

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.exceptions import ConflictError, NotFoundError
from core.models import Guest, GuestCreate, GuestUpdate
from core.services.base import update_columns
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"name", "phone", "cnic", "passport", "email", "address"}


class GuestService:
    """Service for guest operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    def _check_identity_free(
        self, cnic: str | None, passport: str | None, exclude_id: UUID | None = None
    ) -> None:
        for column, value in (("cnic", cnic), ("passport", passport)):
            if not value:
                continue
            owner = self.postgres.execute_scalar(
                f"SELECT id FROM guests WHERE {column} = %s AND id IS DISTINCT FROM %s",
                (value, exclude_id)
            )
            if owner is not None:
                raise ConflictError(f"A guest with {column.upper()} {value} already exists")

    def create(self, data: GuestCreate) -> Guest:
        """
        Register a guest.

        Raises:
            ConflictError: If the CNIC or passport is already registered
        """
        self._check_identity_free(data.cnic, data.passport)

        now = now_utc()
        try:
            row = self.postgres.execute_returning(
                """
                INSERT INTO guests (
                    id, name, phone, cnic, passport, email, address,
                    created_at, updated_at
                ) VALUES (
                    %s, %s, %s, %s, %s, %s, %s,
                    %s, %s
                )
                RETURNING *
                """,
                (
                    uuid4(), data.name, data.phone, data.cnic or None, data.passport or None,
                    data.email, data.address,
                    now, now
                )
            )[0]
        except psycopg2.errors.UniqueViolation as e:
            raise ConflictError("Guest CNIC or passport already registered") from e

        guest = Guest.model_validate(row)

        self.audit.log_change(
            entity_type="guest",
            entity_id=guest.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return guest

    def get_by_id(self, guest_id: UUID) -> Guest | None:
        row = self.postgres.execute_single(
            "SELECT * FROM guests WHERE id = %s",
            (guest_id,)
        )
        return Guest.model_validate(row) if row else None

    def update(self, guest_id: UUID, data: GuestUpdate) -> Guest:
        """
        Update guest fields. Only non-None fields are changed.

        Raises:
            NotFoundError: If guest not found
            ConflictError: If the new CNIC or passport belongs to another guest
        """
        current = self.get_by_id(guest_id)
        if current is None:
            raise NotFoundError("Guest", guest_id)

        updates = data.model_dump(mode="json", exclude_none=True)
        if not updates:
            return current

        self._check_identity_free(updates.get("cnic"), updates.get("passport"), exclude_id=guest_id)

        row = update_columns(self.postgres, "guests", guest_id, updates, _UPDATABLE_COLUMNS)
        if row is None:
            return current

        updated = Guest.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="guest",
                entity_id=guest_id,
                action=AuditAction.UPDATE,
                changes=changes
            )

        return updated

    def list_all(self, limit: int = 100) -> list[Guest]:
        """Newest guests first."""
        rows = self.postgres.execute(
            "SELECT * FROM guests ORDER BY created_at DESC LIMIT %s",
            (limit,)
        )
        return [Guest.model_validate(row) for row in rows]

    def search(self, query: str, limit: int = 50) -> list[Guest]:
        """
        Search guests by name, phone, CNIC or passport.

        Case-insensitive partial match.
        """
        pattern = f"%{query}%"

        rows = self.postgres.execute(
            """
            SELECT * FROM guests
            WHERE name ILIKE %s
               OR phone ILIKE %s
               OR cnic ILIKE %s
               OR passport ILIKE %s
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (pattern, pattern, pattern, pattern, limit)
        )

        return [Guest.model_validate(row) for row in rows]
