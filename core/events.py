"""
Domain events for the hotel back office.

Immutable event objects that represent state changes at the front desk.
A service publishes what happened, and handlers react without the
publisher knowing who's listening.

Event Categories:
- StayEvent: Stay lifecycle (check in, check out)

Events carry the full domain object so handlers don't need to re-fetch state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class HotelEvent:
    """Base class for all hotel domain events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)


# =============================================================================
# STAY EVENTS
# =============================================================================


@dataclass(frozen=True)
class StayEvent(HotelEvent):
    """Events related to stay lifecycle."""
    pass


@dataclass(frozen=True)
class GuestCheckedIn(StayEvent):
    """A stay was opened and its bill created."""
    stay: Any = None  # Stay
    bill: Any = None  # Bill

    @classmethod
    def create(cls, stay: Any, bill: Any) -> "GuestCheckedIn":
        return cls(stay=stay, bill=bill)


@dataclass(frozen=True)
class GuestCheckedOut(StayEvent):
    """A stay was closed and its room and late charges posted."""
    stay: Any = None
    bill: Any = None

    @classmethod
    def create(cls, stay: Any, bill: Any) -> "GuestCheckedOut":
        return cls(stay=stay, bill=bill)

