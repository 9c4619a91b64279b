"""Vendor ledger models."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr


class VendorTransactionType(str, Enum):
    BILL_RECEIVED = "BILL_RECEIVED"
    PAYMENT_MADE = "PAYMENT_MADE"


class VendorPaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"


class VendorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_person: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)
    services: str | None = Field(None, max_length=1000)


class VendorUpdate(BaseModel):
    """Data that can be updated on a vendor. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    contact_person: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)
    services: str | None = Field(None, max_length=1000)


class Vendor(BaseModel):
    id: UUID
    name: str
    contact_person: str | None
    phone: str | None
    email: str | None
    address: str | None
    services: str | None
    transaction_count: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VendorTransactionCreate(BaseModel):
    vendor_id: UUID
    type: VendorTransactionType
    amount_cents: int = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=500)

    @property
    def initial_status(self) -> VendorPaymentStatus:
        """Bills from a vendor start unpaid; payments we make are settled."""
        if self.type == VendorTransactionType.BILL_RECEIVED:
            return VendorPaymentStatus.UNPAID
        return VendorPaymentStatus.PAID


class VendorTransaction(BaseModel):
    id: UUID
    vendor_id: UUID
    type: VendorTransactionType
    amount_cents: int
    description: str
    payment_status: VendorPaymentStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VendorLedger(BaseModel):
    """A vendor with its transactions, newest first."""

    vendor: Vendor
    transactions: list[VendorTransaction]

    @property
    def outstanding_cents(self) -> int:
        """What we still owe: unpaid bills received."""
        return sum(
            t.amount_cents for t in self.transactions
            if t.type == VendorTransactionType.BILL_RECEIVED
            and t.payment_status == VendorPaymentStatus.UNPAID
        )
