"""
PostgreSQL client with connection pooling and optional transaction scope.

Uses psycopg2 with ThreadedConnectionPool. Outside a transaction every
statement runs on its own pooled connection and commits immediately. Inside
`transaction()` all statements on the same thread of control share one
connection and commit (or roll back) together.
"""

import logging
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, Dict, List, Tuple
from uuid import UUID

import psycopg2
import psycopg2.extras
import psycopg2.pool

logger = logging.getLogger(__name__)

# Global JSONB registration flag
_jsonb_registered = False

# Connection bound by an open transaction() block, if any
_transaction_conn: ContextVar[Any] = ContextVar("transaction_conn", default=None)


class PostgresClient:
    """
    PostgreSQL client returning rows as plain dicts.

    Usage:
        db = PostgresClient(database_url)

        rooms = db.execute("SELECT * FROM rooms WHERE status = %s", ("AVAILABLE",))

        # Several writes that must land together
        with db.transaction():
            db.execute_returning("UPDATE stays SET ... RETURNING *", (...))
            db.execute_returning("INSERT INTO bill_items ... RETURNING *", (...))
    """

    # Class-level connection pools shared across instances
    _connection_pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _pools_lock = threading.RLock()

    def __init__(self, database_url: str, min_connections: int = 2, max_connections: int = 20):
        self._database_url = database_url
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._ensure_connection_pool()

    def _ensure_connection_pool(self) -> None:
        """Create connection pool if it doesn't exist."""
        with self._pools_lock:
            if self._database_url not in self._connection_pools:
                pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=self._min_connections,
                    maxconn=self._max_connections,
                    dsn=self._database_url,
                    connect_timeout=30,
                )

                global _jsonb_registered
                if not _jsonb_registered:
                    psycopg2.extras.register_default_jsonb(globally=True)
                    _jsonb_registered = True

                self._connection_pools[self._database_url] = pool
                logger.info("Connection pool created")

    @contextmanager
    def get_connection(self):
        """Borrow a pooled connection for the duration of the block."""
        if self._database_url not in self._connection_pools:
            self._ensure_connection_pool()

        pool = self._connection_pools[self._database_url]
        conn = None

        try:
            conn = pool.getconn()
            if conn is None:
                raise RuntimeError("Could not get connection from pool")
            yield conn

        finally:
            if conn:
                pool.putconn(conn)

    @contextmanager
    def _statement_connection(self):
        """
        Connection for a single statement.

        Yields (conn, autocommit). Inside a transaction the bound connection is
        reused and the caller must not commit.
        """
        bound = _transaction_conn.get()
        if bound is not None:
            yield bound, False
            return

        with self.get_connection() as conn:
            try:
                yield conn, True
            except Exception:
                conn.rollback()
                raise

    @contextmanager
    def transaction(self):
        """
        Run every statement in the block on one connection, atomically.

        Nested calls join the outer transaction. Any exception rolls back
        the whole block and propagates.
        """
        if _transaction_conn.get() is not None:
            yield
            return

        with self.get_connection() as conn:
            token = _transaction_conn.set(conn)
            try:
                yield
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                _transaction_conn.reset(token)

    @property
    def in_transaction(self) -> bool:
        return _transaction_conn.get() is not None

    def _convert_params(self, params: Tuple | Dict | None) -> Tuple | Dict | None:
        """Convert UUIDs to strings and enums to their values."""
        if params is None:
            return None

        def convert(value: Any) -> Any:
            if isinstance(value, UUID):
                return str(value)
            if isinstance(value, Enum):
                return value.value
            if isinstance(value, list):
                return [convert(v) for v in value]
            if isinstance(value, tuple):
                return tuple(convert(v) for v in value)
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(params)

    def execute(self, query: str, params: Tuple | Dict | None = None) -> List[Dict[str, Any]]:
        """Execute query, return list of row dicts. Empty list if no results."""
        params = self._convert_params(params)
        with self._statement_connection() as (conn, autocommit):
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(query, params)
                rows = [dict(row) for row in cur.fetchall()] if cur.description else []
            if autocommit:
                conn.commit()
            return rows

    def execute_single(self, query: str, params: Tuple | Dict | None = None) -> Dict[str, Any] | None:
        """Execute query, return first row or None."""
        results = self.execute(query, params)
        return results[0] if results else None

    def execute_scalar(self, query: str, params: Tuple | Dict | None = None) -> Any:
        """Execute query, return first value of first row or None."""
        params = self._convert_params(params)
        with self._statement_connection() as (conn, autocommit):
            with conn.cursor() as cur:
                cur.execute(query, params)
                result = cur.fetchone()
            if autocommit:
                conn.commit()
            return result[0] if result else None

    def execute_returning(self, query: str, params: Tuple | Dict | None = None) -> List[Dict[str, Any]]:
        """Execute INSERT/UPDATE/DELETE with RETURNING, return results."""
        params = self._convert_params(params)
        with self._statement_connection() as (conn, autocommit):
            with conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(query, params)
                rows = [dict(row) for row in cur.fetchall()]
            if autocommit:
                conn.commit()
            return rows

    def close(self) -> None:
        """Close connection pool."""
        with self._pools_lock:
            if self._database_url in self._connection_pools:
                self._connection_pools[self._database_url].closeall()
                del self._connection_pools[self._database_url]

    @classmethod
    def close_all_pools(cls) -> None:
        """Close all connection pools."""
        with cls._pools_lock:
            for pool in cls._connection_pools.values():
                pool.closeall()
            cls._connection_pools.clear()
