"""POST /api/actions, the unified mutation endpoint."""

from uuid import UUID

from fastapi import APIRouter, Request
from pydantic import BaseModel

from api.base import success_response
from core.exceptions import NotFoundError
from core.models import (
    GuestCreate, GuestUpdate,
    RoomCategoryCreate, RoomCreate, RoomUpdate,
    ReservationCreate, ReservationUpdate, ReservationStatus,
    CheckInRequest, CheckOutRequest,
    CreateBillRequest, AddChargeRequest, RecordPaymentRequest,
    CatalogItemCreate, CatalogItemUpdate,
    VendorCreate, VendorUpdate, VendorTransactionCreate, VendorPaymentStatus,
    ExpenseCreate,
)


class ActionRequest(BaseModel):
    domain: str
    action: str
    data: dict


def create_actions_router(services: dict) -> APIRouter:
    router = APIRouter()

    handlers = {
        "guest": GuestHandler(services["guest"]),
        "room_category": RoomCategoryHandler(services["room"]),
        "room": RoomHandler(services["room"]),
        "reservation": ReservationHandler(services["reservation"]),
        "stay": StayHandler(services["front_desk"]),
        "bill": BillHandler(services["billing"]),
        "payment": PaymentHandler(services["billing"]),
        "catalog": CatalogHandler(services["catalog"]),
        "vendor": VendorHandler(services["vendor"]),
        "expense": ExpenseHandler(services["expense"]),
    }

    @router.post("/actions")
    async def perform_action(request: Request, body: ActionRequest):
        handler = handlers.get(body.domain)
        if handler is None:
            raise ValueError(
                f"Unknown domain '{body.domain}'. "
                f"Valid domains: {', '.join(sorted(handlers.keys()))}"
            )

        if body.action not in handler.ALLOWED_ACTIONS:
            raise ValueError(
                f"Action '{body.action}' not allowed on '{body.domain}'. "
                f"Allowed: {', '.join(sorted(handler.ALLOWED_ACTIONS))}"
            )

        method = getattr(handler, f"_handle_{body.action}")
        result = method(dict(body.data))
        return success_response(result).model_dump(mode="json")

    return router


def _pop_id(data: dict, key: str = "id") -> UUID:
    if key not in data:
        raise ValueError(f"'{key}' is required")
    return UUID(str(data.pop(key)))


# =============================================================================
# HANDLER CLASSES
# =============================================================================


class GuestHandler:
    ALLOWED_ACTIONS = {"create", "update"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(GuestCreate(**data)).model_dump(mode="json")

    def _handle_update(self, data: dict):
        guest_id = _pop_id(data)
        return self.service.update(guest_id, GuestUpdate(**data)).model_dump(mode="json")


class RoomCategoryHandler:
    ALLOWED_ACTIONS = {"create"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create_category(RoomCategoryCreate(**data)).model_dump(mode="json")


class RoomHandler:
    ALLOWED_ACTIONS = {"create", "update"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(RoomCreate(**data)).model_dump(mode="json")

    def _handle_update(self, data: dict):
        room_id = _pop_id(data)
        return self.service.update(room_id, RoomUpdate(**data)).model_dump(mode="json")


class ReservationHandler:
    ALLOWED_ACTIONS = {"create", "update", "cancel"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(ReservationCreate(**data)).model_dump(mode="json")

    def _handle_update(self, data: dict):
        reservation_id = _pop_id(data)
        return self.service.update(reservation_id, ReservationUpdate(**data)).model_dump(mode="json")

    def _handle_cancel(self, data: dict):
        reservation = self.service.update(
            _pop_id(data), ReservationUpdate(status=ReservationStatus.CANCELLED)
        )
        return reservation.model_dump(mode="json")


class StayHandler:
    ALLOWED_ACTIONS = {"check_in", "check_out"}

    def __init__(self, service):
        self.service = service

    def _handle_check_in(self, data: dict):
        stay, bill = self.service.check_in(CheckInRequest(**data))
        return {"stay": stay.model_dump(mode="json"), "bill": bill.model_dump(mode="json")}

    def _handle_check_out(self, data: dict):
        request = CheckOutRequest(**data)
        return self.service.check_out(request.stay_id).model_dump(mode="json")


class BillHandler:
    ALLOWED_ACTIONS = {"create", "add_charge"}

    def __init__(self, engine):
        self.engine = engine

    def _handle_create(self, data: dict):
        request = CreateBillRequest(**data)
        return self.engine.create_bill(request.guest_id, request.stay_id).model_dump(mode="json")

    def _handle_add_charge(self, data: dict):
        return self.engine.add_charge(AddChargeRequest(**data)).model_dump(mode="json")


class PaymentHandler:
    ALLOWED_ACTIONS = {"record"}

    def __init__(self, engine):
        self.engine = engine

    def _handle_record(self, data: dict):
        return self.engine.record_payment(RecordPaymentRequest(**data)).model_dump(mode="json")


class CatalogHandler:
    ALLOWED_ACTIONS = {"create", "update", "set_available"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(CatalogItemCreate(**data)).model_dump(mode="json")

    def _handle_update(self, data: dict):
        item_id = _pop_id(data)
        return self.service.update(item_id, CatalogItemUpdate(**data)).model_dump(mode="json")

    def _handle_set_available(self, data: dict):
        item_id = _pop_id(data)
        available = bool(data.get("available", True))
        return self.service.set_available(item_id, available).model_dump(mode="json")


class VendorHandler:
    ALLOWED_ACTIONS = {"create", "update", "record_transaction", "set_payment_status"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(VendorCreate(**data)).model_dump(mode="json")

    def _handle_update(self, data: dict):
        vendor_id = _pop_id(data)
        return self.service.update(vendor_id, VendorUpdate(**data)).model_dump(mode="json")

    def _handle_record_transaction(self, data: dict):
        return self.service.record_transaction(VendorTransactionCreate(**data)).model_dump(mode="json")

    def _handle_set_payment_status(self, data: dict):
        transaction_id = _pop_id(data)
        status = VendorPaymentStatus(data.get("payment_status"))
        return self.service.set_payment_status(transaction_id, status).model_dump(mode="json")


class ExpenseHandler:
    ALLOWED_ACTIONS = {"create", "delete"}

    def __init__(self, service):
        self.service = service

    def _handle_create(self, data: dict):
        return self.service.create(ExpenseCreate(**data)).model_dump(mode="json")

    def _handle_delete(self, data: dict):
        expense_id = _pop_id(data)
        if not self.service.delete(expense_id):
            raise NotFoundError("Expense", expense_id)
        return {"deleted": True}
