"""
Vendor service for suppliers and what the hotel owes them.

A BILL_RECEIVED transaction starts UNPAID and is settled by marking it
PAID. A PAYMENT_MADE transaction is settled from the start.
"""

import logging
from uuid import UUID, uuid4

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.exceptions import NotFoundError
from core.models import (
    Vendor, VendorCreate, VendorUpdate, VendorLedger,
    VendorTransaction, VendorTransactionCreate, VendorPaymentStatus,
)
from core.services.base import update_columns
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"name", "contact_person", "phone", "email", "address", "services"}


class VendorService:
    """Service for vendor and vendor transaction operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    # =========================================================================
    # VENDORS
    # =========================================================================

    def create(self, data: VendorCreate) -> Vendor:
        now = now_utc()

        row = self.postgres.execute_returning(
            """
            INSERT INTO vendors (
                id, name, contact_person, phone, email, address, services,
                created_at, updated_at
            ) VALUES (
                %s, %s, %s, %s, %s, %s, %s,
                %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), data.name, data.contact_person, data.phone, data.email,
                data.address, data.services,
                now, now
            )
        )[0]

        vendor = Vendor.model_validate(row)

        self.audit.log_change(
            entity_type="vendor",
            entity_id=vendor.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return vendor

    def get_by_id(self, vendor_id: UUID) -> Vendor | None:
        row = self.postgres.execute_single(
            """
            SELECT v.*, (SELECT COUNT(*) FROM vendor_transactions t WHERE t.vendor_id = v.id)
                AS transaction_count
            FROM vendors v
            WHERE v.id = %s
            """,
            (vendor_id,)
        )
        return Vendor.model_validate(row) if row else None

    def update(self, vendor_id: UUID, data: VendorUpdate) -> Vendor:
        """
        Update vendor fields. Only non-None fields are changed.

        Raises:
            NotFoundError: If vendor not found
        """
        current = self.get_by_id(vendor_id)
        if current is None:
            raise NotFoundError("Vendor", vendor_id)

        updates = data.model_dump(mode="json", exclude_none=True)
        if update_columns(self.postgres, "vendors", vendor_id, updates, _UPDATABLE_COLUMNS) is None:
            return current

        updated = self.get_by_id(vendor_id)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="vendor",
                entity_id=vendor_id,
                action=AuditAction.UPDATE,
                changes=changes
            )

        return updated

    def list_all(self) -> list[Vendor]:
        """Vendors by name, each with its transaction count."""
        rows = self.postgres.execute(
            """
            SELECT v.*, COUNT(t.id) AS transaction_count
            FROM vendors v
            LEFT JOIN vendor_transactions t ON t.vendor_id = v.id
            GROUP BY v.id
            ORDER BY v.name ASC
            """
        )
        return [Vendor.model_validate(row) for row in rows]

    def ledger(self, vendor_id: UUID) -> VendorLedger:
        """
        Vendor with all its transactions, newest first.

        Raises:
            NotFoundError: If vendor not found
        """
        vendor = self.get_by_id(vendor_id)
        if vendor is None:
            raise NotFoundError("Vendor", vendor_id)

        rows = self.postgres.execute(
            "SELECT * FROM vendor_transactions WHERE vendor_id = %s ORDER BY created_at DESC",
            (vendor_id,)
        )
        return VendorLedger(
            vendor=vendor,
            transactions=[VendorTransaction.model_validate(row) for row in rows],
        )

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def record_transaction(self, data: VendorTransactionCreate) -> VendorTransaction:
        """
        Record a bill received from, or a payment made to, a vendor.

        Raises:
            NotFoundError: If vendor not found
        """
        exists = self.postgres.execute_scalar(
            "SELECT id FROM vendors WHERE id = %s",
            (data.vendor_id,)
        )
        if exists is None:
            raise NotFoundError("Vendor", data.vendor_id)

        now = now_utc()
        row = self.postgres.execute_returning(
            """
            INSERT INTO vendor_transactions (
                id, vendor_id, type, amount_cents, description,
                payment_status, created_at, updated_at
            ) VALUES (
                %s, %s, %s, %s, %s,
                %s, %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), data.vendor_id, data.type, data.amount_cents, data.description,
                data.initial_status, now, now
            )
        )[0]

        transaction = VendorTransaction.model_validate(row)

        self.audit.log_change(
            entity_type="vendor_transaction",
            entity_id=transaction.id,
            action=AuditAction.CREATE,
            changes={"created": transaction.model_dump(mode="json")}
        )

        logger.info(
            "Recorded %s of %d for vendor %s",
            data.type.value, data.amount_cents, data.vendor_id
        )

        return transaction

    def set_payment_status(
        self, transaction_id: UUID, status: VendorPaymentStatus
    ) -> VendorTransaction:
        """
        Mark a vendor transaction paid or unpaid.

        Raises:
            NotFoundError: If transaction not found
        """
        current = self.postgres.execute_single(
            "SELECT * FROM vendor_transactions WHERE id = %s",
            (transaction_id,)
        )
        if current is None:
            raise NotFoundError("Vendor transaction", transaction_id)

        row = self.postgres.execute_returning(
            """
            UPDATE vendor_transactions
            SET payment_status = %s, updated_at = %s
            WHERE id = %s
            RETURNING *
            """,
            (status, now_utc(), transaction_id)
        )[0]

        if current["payment_status"] != status.value:
            self.audit.log_change(
                entity_type="vendor_transaction",
                entity_id=transaction_id,
                action=AuditAction.UPDATE,
                changes={"payment_status": {"old": current["payment_status"], "new": status.value}}
            )

        return VendorTransaction.model_validate(row)
