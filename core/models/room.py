"""Room inventory models.

Prices are stored in minor units (integer) to avoid floating point issues.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class RoomStatus(str, Enum):
    """Housekeeping/occupancy state of a room."""

    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    BOOKED = "BOOKED"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"


class RoomCategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    base_price_cents: int = Field(..., ge=0)


class RoomCategory(BaseModel):
    """Room category with its nightly base price."""

    id: UUID
    name: str
    description: str | None
    base_price_cents: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RoomCreate(BaseModel):
    room_number: str = Field(..., min_length=1, max_length=20)
    category_id: UUID
    floor: int | None = None
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(BaseModel):
    """Data that can be updated on a room. All fields optional."""

    room_number: str | None = Field(None, min_length=1, max_length=20)
    category_id: UUID | None = None
    floor: int | None = None
    status: RoomStatus | None = None


class Room(BaseModel):
    """
    Room as stored, joined with its category.

    category_name and base_price_cents come from the category at read
    time, so they reflect the current category price.
    """

    id: UUID
    room_number: str
    category_id: UUID
    floor: int | None
    status: RoomStatus
    category_name: str | None = None
    base_price_cents: int | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @property
    def accepts_check_in(self) -> bool:
        """Occupied and maintenance rooms cannot take a new guest."""
        return self.status not in (RoomStatus.OCCUPIED, RoomStatus.MAINTENANCE)


class RoomAvailability(BaseModel):
    """Rooms grouped by status with headline counts."""

    rooms: dict[RoomStatus, list[Room]]
    total: int
    available: int
    occupied: int
    booked: int
    cleaning: int
    maintenance: int
    occupancy_rate: int
