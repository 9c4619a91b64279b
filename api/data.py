"""GET /api/data, the unified read endpoint."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query, Request
from fastapi.encoders import jsonable_encoder

from api.base import success_response
from core.exceptions import NotFoundError
from core.models import BillStatus, CatalogKind, ReservationStatus, RoomStatus


VALID_TYPES = {
    "guests", "room_categories", "rooms", "reservations", "stays",
    "bills", "payments", "catalog", "vendors", "expenses", "audit",
}


def _dump_all(items) -> list[dict]:
    return [item.model_dump(mode="json") for item in items]


def create_data_router(services: dict) -> APIRouter:
    router = APIRouter()

    guest_svc = services["guest"]
    room_svc = services["room"]
    reservation_svc = services["reservation"]
    front_desk = services["front_desk"]
    bill_svc = services["bill"]
    catalog_svc = services["catalog"]
    vendor_svc = services["vendor"]
    expense_svc = services["expense"]
    audit = services["audit"]

    # -------------------------------------------------------------------------
    # Convenience routes (must be registered before the generic /data route)
    # -------------------------------------------------------------------------

    @router.get("/data/rooms/availability")
    async def rooms_availability(request: Request):
        return success_response(
            room_svc.availability().model_dump(mode="json")
        ).model_dump(mode="json")

    @router.get("/data/stays/active")
    async def stays_active(request: Request):
        return success_response(
            _dump_all(front_desk.list_stays(active_only=True))
        ).model_dump(mode="json")

    # -------------------------------------------------------------------------
    # Generic data endpoint
    # -------------------------------------------------------------------------

    @router.get("/data")
    async def get_data(
        request: Request,
        type: str | None = Query(None),
        id: str | None = Query(None),
        search: str | None = Query(None),
        status: str | None = Query(None),
        guest_id: str | None = Query(None),
        category_id: str | None = Query(None),
        bill_number: str | None = Query(None),
        kind: str | None = Query(None),
        entity_type: str | None = Query(None),
        user_id: str | None = Query(None),
        day: date | None = Query(None),
        active: bool = Query(False),
        limit: int = Query(100, ge=1, le=500),
    ):
        if type is None:
            raise ValueError("'type' query parameter is required")

        if type not in VALID_TYPES:
            raise ValueError(f"Unknown type '{type}'. Valid types: {', '.join(sorted(VALID_TYPES))}")

        if type == "guests":
            return _handle_guests(guest_svc, id, search, limit)

        if type == "room_categories":
            return success_response(_dump_all(room_svc.list_categories())).model_dump(mode="json")

        if type == "rooms":
            return _handle_rooms(room_svc, id, status, category_id)

        if type == "reservations":
            return _handle_reservations(reservation_svc, id, status, guest_id, limit)

        if type == "stays":
            return _handle_stays(front_desk, id, active, limit)

        if type == "bills":
            return _handle_bills(bill_svc, id, guest_id, bill_number, status, limit)

        if type == "payments":
            return _handle_payments(bill_svc, id)

        if type == "catalog":
            items = catalog_svc.list_all(CatalogKind(kind) if kind else None, available_only=active)
            return success_response(_dump_all(items)).model_dump(mode="json")

        if type == "vendors":
            return _handle_vendors(vendor_svc, id)

        if type == "expenses":
            return success_response(
                _dump_all(expense_svc.list_all(spent_on=day, limit=limit))
            ).model_dump(mode="json")

        if type == "audit":
            return _handle_audit(audit, entity_type, id, user_id, limit)

    return router


def _handle_guests(guest_svc, id, search, limit):
    if id:
        guest = guest_svc.get_by_id(UUID(id))
        if guest is None:
            raise NotFoundError("Guest", id)
        return success_response(guest.model_dump(mode="json")).model_dump(mode="json")

    guests = guest_svc.search(search, limit) if search else guest_svc.list_all(limit)
    return success_response(_dump_all(guests)).model_dump(mode="json")


def _handle_rooms(room_svc, id, status, category_id):
    if id:
        room = room_svc.get_by_id(UUID(id))
        if room is None:
            raise NotFoundError("Room", id)
        return success_response(room.model_dump(mode="json")).model_dump(mode="json")

    rooms = room_svc.list_all(
        status=RoomStatus(status) if status else None,
        category_id=UUID(category_id) if category_id else None,
    )
    return success_response(_dump_all(rooms)).model_dump(mode="json")


def _handle_reservations(reservation_svc, id, status, guest_id, limit):
    if id:
        reservation = reservation_svc.get_by_id(UUID(id))
        if reservation is None:
            raise NotFoundError("Reservation", id)
        return success_response(reservation.model_dump(mode="json")).model_dump(mode="json")

    reservations = reservation_svc.list_all(
        status=ReservationStatus(status) if status else None,
        guest_id=UUID(guest_id) if guest_id else None,
        limit=limit,
    )
    return success_response(_dump_all(reservations)).model_dump(mode="json")


def _handle_stays(front_desk, id, active, limit):
    if id:
        stay = front_desk.get_stay(UUID(id))
        if stay is None:
            raise NotFoundError("Stay", id)
        return success_response(stay.model_dump(mode="json")).model_dump(mode="json")

    stays = front_desk.list_stays(active_only=active, limit=limit)
    return success_response(_dump_all(stays)).model_dump(mode="json")


def _handle_bills(bill_svc, id, guest_id, bill_number, status, limit):
    if id:
        detail = bill_svc.get_detail(UUID(id))
        data = detail.model_dump(mode="json")
        data["total_paid_cents"] = detail.total_paid_cents
        data["remaining_cents"] = detail.remaining_cents
        return success_response(data).model_dump(mode="json")

    bills = bill_svc.list_all(
        guest_id=UUID(guest_id) if guest_id else None,
        bill_number=bill_number,
        status=BillStatus(status) if status else None,
        limit=limit,
    )
    return success_response(_dump_all(bills)).model_dump(mode="json")


def _handle_payments(bill_svc, id):
    if not id:
        raise ValueError("'payments' type requires 'id' (the bill id)")

    payments, total_paid, remaining = bill_svc.list_payments(UUID(id))
    return success_response({
        "payments": _dump_all(payments),
        "total_paid_cents": total_paid,
        "remaining_cents": remaining,
    }).model_dump(mode="json")


def _handle_audit(audit, entity_type, id, user_id, limit):
    """History of one record, or recent activity of one staff member."""
    if entity_type and id:
        entries = audit.get_entity_history(entity_type, UUID(id))
    elif user_id:
        entries = audit.get_user_activity(UUID(user_id), limit)
    else:
        raise ValueError("'audit' type requires 'entity_type' and 'id', or 'user_id'")

    return success_response(jsonable_encoder(entries)).model_dump(mode="json")


def _handle_vendors(vendor_svc, id):
    if id:
        ledger = vendor_svc.ledger(UUID(id))
        data = ledger.model_dump(mode="json")
        data["outstanding_cents"] = ledger.outstanding_cents
        return success_response(data).model_dump(mode="json")

    return success_response(_dump_all(vendor_svc.list_all())).model_dump(mode="json")
