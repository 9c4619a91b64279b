"""Bill, line item and payment models.

All amounts are stored in minor units (integer) to avoid floating point
issues. Rs 50.00 = 5000.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from core.models.stay import Stay


class BillStatus(str, Enum):
    """Payment status, always derived from total and payments."""

    UNPAID = "UNPAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"


class LineItemType(str, Enum):
    ROOM = "ROOM"
    FOOD = "FOOD"
    SERVICE = "SERVICE"
    OTHER = "OTHER"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    ONLINE = "ONLINE"
    OTHER = "OTHER"


class BillCreate(BaseModel):
    """A fresh, empty bill."""

    guest_id: UUID
    stay_id: UUID | None = None


class Bill(BaseModel):
    """Full bill as stored."""

    id: UUID
    bill_number: str
    guest_id: UUID
    stay_id: UUID | None
    subtotal_cents: int
    tax_cents: int
    total_cents: int
    status: BillStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BillTotals(BaseModel):
    """Recomputed money fields written back to a bill."""

    subtotal_cents: int
    tax_cents: int
    total_cents: int
    status: BillStatus


class LineItemCreate(BaseModel):
    """A line item ready to be stored. Totals already computed."""

    bill_id: UUID
    type: LineItemType
    description: str = Field(..., min_length=1, max_length=500)
    quantity: int = Field(..., ge=1)
    unit_price_cents: int = Field(..., ge=0)
    total_cents: int = Field(..., ge=0)
    room_id: UUID | None = None
    catalog_item_id: UUID | None = None


class LineItem(BaseModel):
    """Full line item as stored. Immutable."""

    id: UUID
    bill_id: UUID
    type: LineItemType
    description: str
    quantity: int
    unit_price_cents: int
    total_cents: int
    room_id: UUID | None
    catalog_item_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentCreate(BaseModel):
    bill_id: UUID
    amount_cents: int = Field(..., gt=0)
    method: PaymentMethod
    note: str | None = Field(None, max_length=500)


class Payment(BaseModel):
    """A recorded payment. Immutable, no voids."""

    id: UUID
    bill_id: UUID
    amount_cents: int
    method: PaymentMethod
    note: str | None
    paid_at: datetime

    model_config = {"from_attributes": True}


class BillDetail(BaseModel):
    """A bill with everything it owns."""

    bill: Bill
    items: list[LineItem]
    payments: list[Payment]

    @property
    def total_paid_cents(self) -> int:
        return sum(p.amount_cents for p in self.payments)

    @property
    def remaining_cents(self) -> int:
        """May be negative on overpayment."""
        return self.bill.total_cents - self.total_paid_cents


class PaymentResult(BaseModel):
    """Outcome of recording a payment."""

    payment: Payment
    total_paid_cents: int
    remaining_cents: int
    status: BillStatus


class CheckoutResult(BaseModel):
    """Outcome of closing a stay."""

    stay: Stay
    bill: Bill
