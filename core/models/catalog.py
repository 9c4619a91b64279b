"""Food menu and extra-service catalog models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from core.models.bill import LineItemType


class CatalogKind(str, Enum):
    FOOD = "FOOD"
    SERVICE = "SERVICE"

    @property
    def line_item_type(self) -> LineItemType:
        return LineItemType(self.value)


class CatalogItemCreate(BaseModel):
    kind: CatalogKind
    name: str = Field(..., min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price_cents: int = Field(..., gt=0)
    available: bool = True


class CatalogItemUpdate(BaseModel):
    """Data that can be updated on a catalog item. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price_cents: int | None = Field(None, gt=0)
    available: bool | None = None


class CatalogItem(BaseModel):
    """A food menu item or an extra service with its price."""

    id: UUID
    kind: CatalogKind
    name: str
    category: str | None
    description: str | None
    price_cents: int
    available: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
