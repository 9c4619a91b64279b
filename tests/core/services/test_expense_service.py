"""Tests for ExpenseService."""

import pytest
from datetime import date
from uuid import uuid4


@pytest.fixture
def expense_service(clean_db, db_audit):
    from core.services.expense_service import ExpenseService
    return ExpenseService(clean_db, db_audit)


class TestExpenses:

    def test_list_by_day(self, as_front_desk, expense_service):
        from core.models import ExpenseCreate

        expense_service.create(ExpenseCreate(category="Utilities", amount_cents=12000, spent_on=date(2025, 4, 1)))
        expense_service.create(ExpenseCreate(category="Groceries", amount_cents=3000, spent_on=date(2025, 4, 2)))

        assert [e.category for e in expense_service.list_all(spent_on=date(2025, 4, 2))] == ["Groceries"]
        assert len(expense_service.list_all()) == 2

    def test_delete_is_audited(self, clean_db, as_front_desk, expense_service):
        from core.models import ExpenseCreate

        expense = expense_service.create(
            ExpenseCreate(category="Repairs", amount_cents=500, spent_on=date(2025, 4, 1))
        )

        assert expense_service.delete(expense.id) is True
        assert expense_service.get_by_id(expense.id) is None
        actions = clean_db.execute(
            "SELECT action FROM audit_log WHERE entity_id = %s ORDER BY created_at",
            (expense.id,)
        )
        assert [a["action"] for a in actions] == ["create", "delete"]

    def test_delete_missing_returns_false(self, as_front_desk, expense_service):
        assert expense_service.delete(uuid4()) is False
