"""Stay (check-in record) models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from utils.timezone import to_utc


class StayCreate(BaseModel):
    """Fields fixed at check-in. Timestamps must carry a timezone."""

    guest_id: UUID
    room_id: UUID
    reservation_id: UUID | None = None
    check_in_at: datetime
    expected_check_out_at: datetime
    custom_rate_cents: int | None = Field(None, ge=0)

    @field_validator("check_in_at", "expected_check_out_at")
    @classmethod
    def must_be_aware(cls, value: datetime) -> datetime:
        return to_utc(value)


class Stay(BaseModel):
    """
    One guest's occupancy of one room.

    Mutated exactly once, at check-out, when actual_check_out_at and the
    late checkout fields are set.
    """

    id: UUID
    guest_id: UUID
    room_id: UUID
    reservation_id: UUID | None
    custom_rate_cents: int | None
    check_in_at: datetime
    expected_check_out_at: datetime
    actual_check_out_at: datetime | None
    late_checkout: bool
    late_charges_cents: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def is_closed(self) -> bool:
        """Whether the guest has checked out."""
        return self.actual_check_out_at is not None
