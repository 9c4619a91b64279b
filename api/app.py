"""Application factory: wires clients, services, handlers and routers."""

import logging

from fastapi import FastAPI

from api.actions import create_actions_router
from api.data import create_data_router
from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware, StaffContextMiddleware
from api.reports import create_reports_router
from clients.postgres_client import PostgresClient
from clients.vault_client import get_database_url
from core.audit import AuditLogger
from core.billing import StayBillingEngine
from core.config import BillingConfig
from core.event_bus import EventBus
from core.handlers import register_handlers
from core.services.bill_service import BillService
from core.services.catalog_service import CatalogService
from core.services.expense_service import ExpenseService
from core.services.front_desk_service import FrontDeskService
from core.services.guest_service import GuestService
from core.services.report_service import ReportService
from core.services.reservation_service import ReservationService
from core.services.room_service import RoomService
from core.services.vendor_service import VendorService
from core.store import PostgresRecordStore

logger = logging.getLogger(__name__)


def build_services(postgres: PostgresClient, config: BillingConfig) -> dict:
    """Construct every service against one database and subscribe event handlers."""
    audit = AuditLogger(postgres)
    event_bus = EventBus()
    store = PostgresRecordStore(postgres)
    engine = StayBillingEngine(store, audit, config)

    register_handlers(event_bus, store)

    return {
        "audit": audit,
        "guest": GuestService(postgres, audit),
        "room": RoomService(postgres, audit),
        "reservation": ReservationService(postgres, audit),
        "front_desk": FrontDeskService(store, engine, audit, event_bus),
        "billing": engine,
        "bill": BillService(postgres, engine),
        "catalog": CatalogService(postgres, audit),
        "vendor": VendorService(postgres, audit),
        "expense": ExpenseService(postgres, audit),
        "report": ReportService(postgres, config),
    }


def create_app(
    services: dict | None = None,
    config: BillingConfig | None = None,
) -> FastAPI:
    """
    Build the FastAPI app.

    Without services, connects to the database named in Vault.
    """
    if services is None:
        config = config or BillingConfig()
        services = build_services(PostgresClient(get_database_url()), config)

    app = FastAPI(title="Hotel Back Office")
    app.add_middleware(StaffContextMiddleware)
    app.add_middleware(RequestIDMiddleware)
    register_error_handlers(app)

    app.include_router(create_data_router(services), prefix="/api")
    app.include_router(create_actions_router(services), prefix="/api")
    app.include_router(create_reports_router(services), prefix="/api")

    logger.info("Application created")
    return app
