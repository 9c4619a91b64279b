"""API test fixtures: the app over the in-memory billing stack and mocked registries."""

from unittest.mock import Mock

import pytest
from starlette.testclient import TestClient

from api.app import create_app
from core.audit import AuditLogger
from core.models import Guest
from core.services.catalog_service import CatalogService
from core.services.expense_service import ExpenseService
from core.services.guest_service import GuestService
from core.services.report_service import ReportService
from core.services.reservation_service import ReservationService
from core.services.room_service import RoomService
from core.services.vendor_service import VendorService
from utils.timezone import now_utc


# =============================================================================
# SERVICES DICT
# =============================================================================


@pytest.fixture
def guest_service():
    return Mock(spec=GuestService)


@pytest.fixture
def report_service():
    return Mock(spec=ReportService)


@pytest.fixture
def bill_service(engine):
    """BillService stand-in whose reads go through the real engine."""
    service = Mock()
    service.get_detail.side_effect = engine.get_bill_detail

    def list_payments(bill_id):
        detail = engine.get_bill_detail(bill_id)
        return detail.payments, detail.total_paid_cents, detail.remaining_cents

    service.list_payments.side_effect = list_payments
    return service


@pytest.fixture
def services(front_desk, engine, guest_service, report_service, bill_service):
    return {
        "guest": guest_service,
        "room": Mock(spec=RoomService),
        "reservation": Mock(spec=ReservationService),
        "front_desk": front_desk,
        "billing": engine,
        "bill": bill_service,
        "catalog": Mock(spec=CatalogService),
        "vendor": Mock(spec=VendorService),
        "expense": Mock(spec=ExpenseService),
        "report": report_service,
        "audit": Mock(spec=AuditLogger),
    }


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(services):
    return create_app(services=services)


@pytest.fixture
def client(app, front_desk_user_id):
    """Client acting as the front desk clerk."""
    c = TestClient(app, raise_server_exceptions=False)
    c.headers.update({"X-User-Id": str(front_desk_user_id)})
    return c


@pytest.fixture
def anonymous_client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def sample_guest():
    from uuid import uuid4

    now = now_utc()
    return Guest(
        id=uuid4(), name="Ayesha Khan", phone="0300-1234567",
        cnic=None, passport=None, email=None, address=None,
        created_at=now, updated_at=now,
    )
