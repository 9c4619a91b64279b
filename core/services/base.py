"""Shared SQL helpers for registry services."""

import logging
from typing import Any
from uuid import UUID

from clients.postgres_client import PostgresClient
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


def update_columns(
    postgres: PostgresClient,
    table: str,
    entity_id: UUID,
    updates: dict[str, Any],
    allowed: set[str],
) -> dict | None:
    """
    UPDATE the allowed columns of one row and return it.

    Unknown fields are logged and skipped. Returns None when nothing
    updatable was given or the row does not exist.
    """
    for field in updates:
        if field not in allowed:
            logger.warning("Ignoring unknown field '%s' on %s %s", field, table, entity_id)

    valid = {k: v for k, v in updates.items() if k in allowed}
    if not valid:
        return None

    set_parts = [f"{field} = %s" for field in valid]
    params = list(valid.values())

    set_parts.append("updated_at = %s")
    params.append(now_utc())
    params.append(entity_id)

    rows = postgres.execute_returning(
        f"""
        UPDATE {table}
        SET {', '.join(set_parts)}
        WHERE id = %s
        RETURNING *
        """,
        tuple(params)
    )
    return rows[0] if rows else None
