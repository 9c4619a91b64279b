"""
Expense service for day-to-day operating costs.

Expenses are the only records that can be deleted outright.
"""

import logging
from datetime import date
from uuid import UUID, uuid4

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction
from core.models import Expense, ExpenseCreate
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    def create(self, data: ExpenseCreate) -> Expense:
        row = self.postgres.execute_returning(
            """
            INSERT INTO expenses (id, category, amount_cents, description, spent_on, created_at)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING *
            """,
            (uuid4(), data.category, data.amount_cents, data.description, data.spent_on, now_utc())
        )[0]

        expense = Expense.model_validate(row)

        self.audit.log_change(
            entity_type="expense",
            entity_id=expense.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return expense

    def get_by_id(self, expense_id: UUID) -> Expense | None:
        row = self.postgres.execute_single(
            "SELECT * FROM expenses WHERE id = %s",
            (expense_id,)
        )
        return Expense.model_validate(row) if row else None

    def delete(self, expense_id: UUID) -> bool:
        """
        Delete an expense.

        Returns:
            True if deleted, False if not found
        """
        current = self.get_by_id(expense_id)
        if current is None:
            return False

        self.postgres.execute(
            "DELETE FROM expenses WHERE id = %s",
            (expense_id,)
        )

        self.audit.log_change(
            entity_type="expense",
            entity_id=expense_id,
            action=AuditAction.DELETE,
            changes={"deleted": current.model_dump(mode="json")}
        )

        return True

    def list_all(self, spent_on: date | None = None, limit: int = 200) -> list[Expense]:
        """Expenses newest first, optionally for one day."""
        rows = self.postgres.execute(
            """
            SELECT * FROM expenses
            WHERE (%s::date IS NULL OR spent_on = %s)
            ORDER BY spent_on DESC, created_at DESC
            LIMIT %s
            """,
            (spent_on, spent_on, limit)
        )
        return [Expense.model_validate(row) for row in rows]
