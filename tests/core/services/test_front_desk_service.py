"""Tests for FrontDeskService check-in and check-out."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from core.audit import AuditAction
from core.exceptions import (
    AlreadyClosedError,
    NotFoundError,
    RoomUnavailableError,
    ValidationError,
)
from core.models import (
    BillStatus,
    CheckInRequest,
    LineItemType,
    PaymentMethod,
    ReservationStatus,
    RoomStatus,
)

NOW = datetime(2025, 3, 1, 14, 0, tzinfo=timezone.utc)


@pytest.fixture
def room(store):
    return store.add_room(room_number="204", base_price_cents=5000)


@pytest.fixture
def reservation(store, room):
    return store.add_reservation(
        guest_id=uuid4(),
        room_id=room.id,
        check_in_date=NOW,
        expected_check_out=NOW + timedelta(days=2),
        advance_payment_cents=2500,
    )


def _walk_in(room, **overrides):
    fields = {
        "guest_id": uuid4(),
        "room_id": room.id,
        "expected_check_out": NOW + timedelta(days=1),
    }
    fields.update(overrides)
    return CheckInRequest(**fields)


# =============================================================================
# CHECK IN
# =============================================================================


class TestCheckIn:

    def test_walk_in_opens_stay_and_bill(self, front_desk, store, room):
        stay, bill = front_desk.check_in(_walk_in(room), now=NOW)

        assert stay.check_in_at == NOW
        assert stay.reservation_id is None
        assert not stay.is_closed
        assert bill.stay_id == stay.id
        assert bill.status == BillStatus.UNPAID
        assert store.get_room(room.id).status == RoomStatus.OCCUPIED

    def test_reservation_fills_missing_fields(self, front_desk, store, reservation):
        stay, bill = front_desk.check_in(
            CheckInRequest(reservation_id=reservation.id), now=NOW
        )

        assert stay.guest_id == reservation.guest_id
        assert stay.room_id == reservation.room_id
        assert stay.expected_check_out_at == reservation.expected_check_out
        [payment] = store.list_payments(bill.id)
        assert payment.amount_cents == 2500
        assert payment.method == PaymentMethod.CASH
        assert bill.status == BillStatus.PARTIALLY_PAID

    def test_explicit_fields_win_over_reservation(self, front_desk, store, reservation):
        later = NOW + timedelta(days=5)

        stay, bill = front_desk.check_in(CheckInRequest(
            reservation_id=reservation.id,
            expected_check_out=later,
            advance_payment_cents=0,
        ), now=NOW)

        assert stay.expected_check_out_at == later
        assert store.list_payments(bill.id) == []

    def test_reservation_marked_checked_in(self, front_desk, store, reservation):
        front_desk.check_in(CheckInRequest(reservation_id=reservation.id), now=NOW)

        assert store.get_reservation(reservation.id).status == ReservationStatus.CHECKED_IN

    def test_booked_room_accepts_check_in(self, front_desk, store):
        booked = store.add_room(room_number="305", status=RoomStatus.BOOKED)

        stay, _ = front_desk.check_in(_walk_in(booked), now=NOW)

        assert stay.room_id == booked.id
        assert store.get_room(booked.id).status == RoomStatus.OCCUPIED

    @pytest.mark.parametrize("status", [RoomStatus.OCCUPIED, RoomStatus.MAINTENANCE])
    def test_unavailable_room_rejected(self, front_desk, store, status):
        blocked = store.add_room(room_number="410", status=status)

        with pytest.raises(RoomUnavailableError, match="410"):
            front_desk.check_in(_walk_in(blocked), now=NOW)

        assert store.stays == {}
        assert store.bills == {}

    def test_unknown_room_raises_not_found(self, front_desk):
        with pytest.raises(NotFoundError, match="Room"):
            front_desk.check_in(CheckInRequest(
                guest_id=uuid4(), room_id=uuid4(), expected_check_out=NOW + timedelta(days=1),
            ), now=NOW)

    def test_unknown_reservation_raises_not_found(self, front_desk):
        with pytest.raises(NotFoundError, match="Reservation"):
            front_desk.check_in(CheckInRequest(reservation_id=uuid4()), now=NOW)

    @pytest.mark.parametrize("missing", ["guest_id", "room_id", "expected_check_out"])
    def test_missing_required_field_without_reservation(self, front_desk, room, missing):
        with pytest.raises(ValidationError):
            front_desk.check_in(_walk_in(room, **{missing: None}), now=NOW)

    def test_audits_stay_and_room(self, front_desk, audit, room):
        stay, _ = front_desk.check_in(_walk_in(room), now=NOW)

        logged = {
            (c.kwargs["entity_type"], c.kwargs["action"])
            for c in audit.log_change.call_args_list
        }
        assert ("stay", AuditAction.CREATE) in logged
        assert ("room", AuditAction.UPDATE) in logged
        assert ("bill", AuditAction.CREATE) in logged


# =============================================================================
# CHECK OUT
# =============================================================================


class TestCheckOut:

    def test_closes_bill_and_releases_room(self, front_desk, store, room):
        stay, _ = front_desk.check_in(_walk_in(room, expected_check_out=NOW + timedelta(days=2)), now=NOW)

        result = front_desk.check_out(stay.id, now=NOW + timedelta(days=2))

        assert result.stay.is_closed
        assert result.bill.total_cents == 10500
        assert store.get_room(room.id).status == RoomStatus.AVAILABLE

    def test_reservation_marked_checked_out(self, front_desk, store, reservation):
        stay, _ = front_desk.check_in(CheckInRequest(reservation_id=reservation.id), now=NOW)

        front_desk.check_out(stay.id, now=NOW + timedelta(days=2))

        assert store.get_reservation(reservation.id).status == ReservationStatus.CHECKED_OUT

    def test_late_checkout_posts_charge(self, front_desk, store, room):
        stay, _ = front_desk.check_in(_walk_in(room), now=NOW)

        result = front_desk.check_out(stay.id, now=NOW + timedelta(days=1, hours=3))

        other = [i for i in store.list_line_items(result.bill.id) if i.type == LineItemType.OTHER]
        assert [i.total_cents for i in other] == [1250]
        assert result.stay.late_checkout is True

    def test_second_check_out_rejected(self, front_desk, store, room):
        stay, _ = front_desk.check_in(_walk_in(room), now=NOW)
        front_desk.check_out(stay.id, now=NOW + timedelta(hours=20))

        with pytest.raises(AlreadyClosedError):
            front_desk.check_out(stay.id, now=NOW + timedelta(hours=21))

    def test_unknown_stay_raises_not_found(self, front_desk):
        with pytest.raises(NotFoundError):
            front_desk.check_out(uuid4())


class TestListStays:

    def test_active_only_excludes_checked_out(self, front_desk, store):
        first = store.add_room(room_number="101")
        second = store.add_room(room_number="102")
        open_stay, _ = front_desk.check_in(_walk_in(first), now=NOW)
        done_stay, _ = front_desk.check_in(_walk_in(second), now=NOW + timedelta(minutes=1))
        front_desk.check_out(done_stay.id, now=NOW + timedelta(hours=5))

        active = front_desk.list_stays(active_only=True)
        everything = front_desk.list_stays()

        assert [s.id for s in active] == [open_stay.id]
        assert [s.id for s in everything] == [done_stay.id, open_stay.id]

    def test_get_stay_missing_returns_none(self, front_desk):
        assert front_desk.get_stay(uuid4()) is None
