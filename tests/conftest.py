"""Shared test fixtures for the hotel back-office test suite."""

import os
from pathlib import Path
from unittest.mock import Mock
from uuid import UUID

import pytest
from dotenv import load_dotenv

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

from clients.vault_client import reset_vault_cache
from core.audit import AuditLogger
from core.billing import StayBillingEngine
from core.config import BillingConfig
from core.event_bus import EventBus
from core.handlers import register_handlers
from core.services.front_desk_service import FrontDeskService
from tests.fakes import InMemoryRecordStore
from utils.user_context import staff_context, clear_current_staff

reset_vault_cache()

SCHEMA_PATH = Path(__file__).parent.parent / "db" / "schema.sql"


# =============================================================================
# TEST STAFF CONSTANTS
# =============================================================================

FRONT_DESK_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
MANAGER_USER_ID = UUID("00000000-0000-0000-0000-000000000002")


# =============================================================================
# STAFF CONTEXT FIXTURES
# =============================================================================


@pytest.fixture(autouse=True)
def reset_staff_context():
    """Ensure clean staff context before and after each test."""
    clear_current_staff()
    yield
    clear_current_staff()


@pytest.fixture
def front_desk_user_id() -> UUID:
    return FRONT_DESK_USER_ID


@pytest.fixture
def as_front_desk(front_desk_user_id):
    """Act as the front desk clerk for the duration of the test."""
    with staff_context(front_desk_user_id):
        yield front_desk_user_id


# =============================================================================
# IN-MEMORY BILLING FIXTURES
# =============================================================================


@pytest.fixture
def billing_config() -> BillingConfig:
    return BillingConfig()


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def audit() -> Mock:
    return Mock(spec=AuditLogger)


@pytest.fixture
def event_bus(store) -> EventBus:
    bus = EventBus()
    register_handlers(bus, store)
    return bus


@pytest.fixture
def engine(store, audit, billing_config) -> StayBillingEngine:
    return StayBillingEngine(store, audit, billing_config)


@pytest.fixture
def front_desk(store, engine, audit, event_bus) -> FrontDeskService:
    return FrontDeskService(store, engine, audit, event_bus)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="session")
def db():
    """
    Session-scoped PostgresClient against a disposable test database.

    Skips when HOTEL_TEST_DATABASE_URL is not set. The schema is applied
    once per session.
    """
    database_url = os.getenv("HOTEL_TEST_DATABASE_URL")
    if not database_url:
        pytest.skip("HOTEL_TEST_DATABASE_URL not set")

    from clients.postgres_client import PostgresClient

    client = PostgresClient(database_url, min_connections=1, max_connections=5)
    client.execute(SCHEMA_PATH.read_text())
    yield client
    client.close()


@pytest.fixture
def clean_db(db):
    """Empty every table before the test."""
    db.execute("""
        TRUNCATE
            audit_log, payments, bill_items, bills, stays, reservations,
            rooms, room_categories, guests, catalog_items,
            vendor_transactions, vendors, expenses
        CASCADE
    """)
    return db


@pytest.fixture
def db_audit(clean_db) -> AuditLogger:
    return AuditLogger(clean_db)


@pytest.fixture
def make_guest(clean_db, db_audit):
    """Factory: register a guest in the database."""
    from core.models import GuestCreate
    from core.services.guest_service import GuestService

    service = GuestService(clean_db, db_audit)

    def _make(name="Ayesha Khan", phone="0300-1234567", **kwargs):
        return service.create(GuestCreate(name=name, phone=phone, **kwargs))

    return _make


@pytest.fixture
def make_room(clean_db, db_audit):
    """Factory: a room in a fresh category at the given nightly price."""
    from core.models import RoomCategoryCreate, RoomCreate
    from core.services.room_service import RoomService

    service = RoomService(clean_db, db_audit)

    def _make(room_number="101", base_price_cents=5000, category_name=None, **kwargs):
        category = service.create_category(RoomCategoryCreate(
            name=category_name or f"Category {room_number}",
            base_price_cents=base_price_cents,
        ))
        return service.create(RoomCreate(room_number=room_number, category_id=category.id, **kwargs))

    return _make
