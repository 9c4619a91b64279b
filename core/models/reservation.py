"""Reservation models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.timezone import to_utc


class ReservationStatus(str, Enum):
    """Reservation lifecycle status."""

    RESERVED = "RESERVED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"


class ReservationCreate(BaseModel):
    """Data required to book a room."""

    guest_id: UUID
    room_id: UUID
    check_in_date: datetime
    expected_check_out: datetime
    advance_payment_cents: int = Field(0, ge=0)
    notes: str | None = Field(None, max_length=2000)

    @field_validator("check_in_date", "expected_check_out")
    @classmethod
    def must_be_aware(cls, value: datetime) -> datetime:
        return to_utc(value)

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "ReservationCreate":
        if self.expected_check_out <= self.check_in_date:
            raise ValueError("expected_check_out must be after check_in_date")
        return self


class ReservationUpdate(BaseModel):
    """Status and notes are the only mutable fields."""

    status: ReservationStatus | None = None
    notes: str | None = Field(None, max_length=2000)


class Reservation(BaseModel):
    """Full reservation as stored."""

    id: UUID
    guest_id: UUID
    room_id: UUID
    check_in_date: datetime
    expected_check_out: datetime
    advance_payment_cents: int
    notes: str | None
    status: ReservationStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
