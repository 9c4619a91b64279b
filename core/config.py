"""Billing and hotel configuration."""

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.timezone import to_local, now_utc


class BillingConfig(BaseModel):
    """
    Billing rules and hotel-wide settings.

    Money is in minor units (cents / paisa), rates in basis points
    (10000 = 100%), durations in hours.
    """

    tax_rate_bps: int = Field(
        default=500,
        description="Flat tax applied to every bill subtotal",
        ge=0,
        le=10000,
    )

    # Late checkout tiers
    grace_period_hours: float = Field(
        default=2,
        description="Late by up to this many hours costs nothing",
        ge=0,
    )
    first_tier_hours: float = Field(
        default=6,
        description="Upper bound (inclusive) of the first late tier",
        gt=0,
    )
    first_tier_percent: int = Field(
        default=25,
        description="Share of the nightly rate charged in the first late tier",
        ge=0,
        le=100,
    )
    second_tier_percent: int = Field(
        default=50,
        description="Share of the nightly rate charged beyond the first tier",
        ge=0,
        le=100,
    )

    # Consistency
    atomic_operations: bool = Field(
        default=False,
        description="Wrap multi-step check-in/check-out/charge operations in one store transaction",
    )

    # Locale
    timezone: str = Field(
        default="Asia/Karachi",
        description="IANA timezone used for report day and month boundaries",
    )
    currency: str = Field(
        default="PKR",
        description="ISO 4217 code, display only",
        min_length=3,
        max_length=3,
    )

    @field_validator("timezone")
    @classmethod
    def timezone_must_exist(cls, value: str) -> str:
        to_local(now_utc(), value)
        return value

    @model_validator(mode="after")
    def tiers_must_be_ordered(self) -> "BillingConfig":
        if self.first_tier_hours < self.grace_period_hours:
            raise ValueError("first_tier_hours must not be shorter than grace_period_hours")
        return self
