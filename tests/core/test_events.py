"""Tests for domain event models."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from uuid import UUID

import pytest

from core.events import HotelEvent, StayEvent, GuestCheckedIn, GuestCheckedOut


class TestEventBase:

    def test_event_id_is_unique_uuid_string(self):
        first = GuestCheckedOut.create(stay=None, bill=None)
        second = GuestCheckedOut.create(stay=None, bill=None)

        assert UUID(first.event_id)
        assert first.event_id != second.event_id

    def test_occurred_at_is_timezone_aware(self):
        event = GuestCheckedIn.create(stay=None, bill=None)

        assert isinstance(event.occurred_at, datetime)
        assert event.occurred_at.tzinfo is not None

    def test_events_are_immutable(self):
        event = GuestCheckedOut.create(stay=None, bill="bill")

        with pytest.raises(FrozenInstanceError):
            event.bill = "other"


class TestEventHierarchy:

    @pytest.mark.parametrize("cls", [GuestCheckedIn, GuestCheckedOut])
    def test_category_and_base(self, cls):
        assert issubclass(cls, StayEvent)
        assert issubclass(cls, HotelEvent)


class TestCreate:

    def test_stay_events_carry_stay_and_bill(self):
        stay, bill = object(), object()

        checked_in = GuestCheckedIn.create(stay=stay, bill=bill)
        checked_out = GuestCheckedOut.create(stay=stay, bill=bill)

        assert checked_in.stay is stay and checked_in.bill is bill
        assert checked_out.stay is stay and checked_out.bill is bill
