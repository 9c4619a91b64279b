"""Guest registry models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, EmailStr


class GuestCreate(BaseModel):
    """Data required to register a guest."""

    name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    cnic: str | None = Field(None, max_length=20)
    passport: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)


class GuestUpdate(BaseModel):
    """Data that can be updated on a guest. All fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)
    phone: str | None = Field(None, min_length=1, max_length=50)
    cnic: str | None = Field(None, max_length=20)
    passport: str | None = Field(None, max_length=50)
    email: EmailStr | None = None
    address: str | None = Field(None, max_length=500)


class Guest(BaseModel):
    """Full guest record as stored."""

    id: UUID
    name: str
    phone: str
    cnic: str | None
    passport: str | None
    email: str | None
    address: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
