"""
Bill service for listing and reading bills.

Every write to a bill goes through StayBillingEngine. This service only
reads, with filters the back office needs.
"""

import logging
from uuid import UUID

from clients.postgres_client import PostgresClient
from core.billing import StayBillingEngine
from core.models import Bill, BillDetail, BillStatus, Payment

logger = logging.getLogger(__name__)


class BillService:
    """Read side of billing."""

    def __init__(self, postgres: PostgresClient, engine: StayBillingEngine):
        self.postgres = postgres
        self.engine = engine

    def get_detail(self, bill_id: UUID) -> BillDetail:
        """Bill with items and payments. Raises NotFoundError."""
        return self.engine.get_bill_detail(bill_id)

    def list_all(
        self,
        guest_id: UUID | None = None,
        bill_number: str | None = None,
        status: BillStatus | None = None,
        limit: int = 100
    ) -> list[Bill]:
        """Bills newest first. bill_number matches partially."""
        pattern = f"%{bill_number}%" if bill_number else None

        rows = self.postgres.execute(
            """
            SELECT * FROM bills
            WHERE (%s::uuid IS NULL OR guest_id = %s)
              AND (%s::text IS NULL OR bill_number ILIKE %s)
              AND (%s::text IS NULL OR status = %s)
            ORDER BY created_at DESC
            LIMIT %s
            """,
            (guest_id, guest_id, pattern, pattern, status, status, limit)
        )
        return [Bill.model_validate(row) for row in rows]

    def list_payments(self, bill_id: UUID) -> tuple[list[Payment], int, int]:
        """
        Payments on a bill with total paid and remaining.

        Remaining is negative when the bill is overpaid.
        """
        detail = self.engine.get_bill_detail(bill_id)
        return detail.payments, detail.total_paid_cents, detail.remaining_cents
