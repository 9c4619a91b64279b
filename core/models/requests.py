"""One request model per front-desk and billing operation.

Each operation gets its own explicit shape instead of a loose dict, so
missing or mistyped fields fail at parse time.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from core.models.bill import LineItemType, PaymentMethod
from utils.timezone import to_utc


class CheckInRequest(BaseModel):
    """
    Open a stay.

    With a reservation, any of guest, room, expected check-out and advance
    payment left out are taken from the reservation.
    """

    reservation_id: UUID | None = None
    guest_id: UUID | None = None
    room_id: UUID | None = None
    expected_check_out: datetime | None = None
    custom_rate_cents: int | None = Field(None, ge=0)
    advance_payment_cents: int | None = Field(None, ge=0)

    @field_validator("expected_check_out")
    @classmethod
    def expected_check_out_must_be_aware(cls, value: datetime | None) -> datetime | None:
        return to_utc(value) if value is not None else None


class CheckOutRequest(BaseModel):
    stay_id: UUID


class AddChargeRequest(BaseModel):
    """
    Post a charge to a bill.

    Either unit_price_cents or catalog_item_id must be given. With a catalog
    item, a missing price or type is taken from the item.
    """

    bill_id: UUID
    type: LineItemType | None = None
    description: str | None = Field(None, min_length=1, max_length=500)
    quantity: int = Field(1, ge=1)
    unit_price_cents: int | None = Field(None, ge=0)
    catalog_item_id: UUID | None = None


class RecordPaymentRequest(BaseModel):
    bill_id: UUID
    amount_cents: int
    method: PaymentMethod = PaymentMethod.CASH
    note: str | None = Field(None, max_length=500)


class CreateBillRequest(BaseModel):
    """A standalone bill, e.g. walk-in restaurant guests."""

    guest_id: UUID
    stay_id: UUID | None = None
