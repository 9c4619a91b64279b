"""
Catalog service for the food menu and extra services.

Catalog prices are what a charge defaults to when posted from the
catalog. Line items keep their own copy of the price, so editing the
catalog never changes an existing bill.
"""

import logging
from uuid import UUID, uuid4

from clients.postgres_client import PostgresClient
from core.audit import AuditLogger, AuditAction, compute_changes
from core.exceptions import NotFoundError
from core.models import CatalogItem, CatalogItemCreate, CatalogItemUpdate, CatalogKind
from core.services.base import update_columns
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = {"name", "category", "description", "price_cents", "available"}


class CatalogService:
    """Service for catalog operations."""

    def __init__(self, postgres: PostgresClient, audit: AuditLogger):
        self.postgres = postgres
        self.audit = audit

    def create(self, data: CatalogItemCreate) -> CatalogItem:
        now = now_utc()

        row = self.postgres.execute_returning(
            """
            INSERT INTO catalog_items (
                id, kind, name, category, description,
                price_cents, available, created_at, updated_at
            ) VALUES (
                %s, %s, %s, %s, %s,
                %s, %s, %s, %s
            )
            RETURNING *
            """,
            (
                uuid4(), data.kind, data.name, data.category, data.description,
                data.price_cents, data.available, now, now
            )
        )[0]

        item = CatalogItem.model_validate(row)

        self.audit.log_change(
            entity_type="catalog_item",
            entity_id=item.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )

        return item

    def get_by_id(self, item_id: UUID) -> CatalogItem | None:
        row = self.postgres.execute_single(
            "SELECT * FROM catalog_items WHERE id = %s",
            (item_id,)
        )
        return CatalogItem.model_validate(row) if row else None

    def list_all(self, kind: CatalogKind | None = None, available_only: bool = False) -> list[CatalogItem]:
        """Catalog items by kind, category and name."""
        rows = self.postgres.execute(
            """
            SELECT * FROM catalog_items
            WHERE (%s::text IS NULL OR kind = %s)
              AND (%s = false OR available = true)
            ORDER BY kind ASC, category ASC NULLS LAST, name ASC
            """,
            (kind, kind, available_only)
        )
        return [CatalogItem.model_validate(row) for row in rows]

    def update(self, item_id: UUID, data: CatalogItemUpdate) -> CatalogItem:
        """
        Update catalog fields, including the availability toggle.

        Raises:
            NotFoundError: If item not found
        """
        current = self.get_by_id(item_id)
        if current is None:
            raise NotFoundError("Catalog item", item_id)

        updates = data.model_dump(mode="json", exclude_none=True)
        row = update_columns(self.postgres, "catalog_items", item_id, updates, _UPDATABLE_COLUMNS)
        if row is None:
            return current

        updated = CatalogItem.model_validate(row)

        changes = compute_changes(
            current.model_dump(mode="json"),
            updated.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="catalog_item",
                entity_id=item_id,
                action=AuditAction.UPDATE,
                changes=changes
            )

        return updated

    def set_available(self, item_id: UUID, available: bool) -> CatalogItem:
        return self.update(item_id, CatalogItemUpdate(available=available))
