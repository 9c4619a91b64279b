"""Tests for RoomService."""

import pytest
from uuid import uuid4


@pytest.fixture
def room_service(clean_db, db_audit):
    from core.services.room_service import RoomService
    return RoomService(clean_db, db_audit)


class TestCategories:

    def test_duplicate_name_conflicts(self, as_front_desk, room_service):
        from core.exceptions import ConflictError
        from core.models import RoomCategoryCreate

        room_service.create_category(RoomCategoryCreate(name="Deluxe", base_price_cents=8000))

        with pytest.raises(ConflictError, match="Deluxe"):
            room_service.create_category(RoomCategoryCreate(name="Deluxe", base_price_cents=9000))

    def test_listed_by_name(self, as_front_desk, room_service):
        from core.models import RoomCategoryCreate

        room_service.create_category(RoomCategoryCreate(name="Suite", base_price_cents=15000))
        room_service.create_category(RoomCategoryCreate(name="Deluxe", base_price_cents=8000))

        assert [c.name for c in room_service.list_categories()] == ["Deluxe", "Suite"]


class TestRooms:

    def test_room_carries_category_price(self, as_front_desk, make_room):
        room = make_room(room_number="201", base_price_cents=7500, category_name="Deluxe")

        assert room.category_name == "Deluxe"
        assert room.base_price_cents == 7500

    def test_unknown_category_raises(self, as_front_desk, room_service):
        from core.exceptions import NotFoundError
        from core.models import RoomCreate

        with pytest.raises(NotFoundError, match="Room category"):
            room_service.create(RoomCreate(room_number="999", category_id=uuid4()))

    def test_duplicate_number_conflicts(self, as_front_desk, room_service, make_room):
        from core.exceptions import ConflictError
        from core.models import RoomCreate

        room = make_room(room_number="101")

        with pytest.raises(ConflictError):
            room_service.create(RoomCreate(room_number="101", category_id=room.category_id))

    def test_update_status(self, as_front_desk, room_service, make_room):
        from core.models import RoomStatus, RoomUpdate

        room = make_room()

        updated = room_service.update(room.id, RoomUpdate(status=RoomStatus.CLEANING))

        assert updated.status == RoomStatus.CLEANING

    def test_list_filters_by_status(self, as_front_desk, room_service, make_room):
        from core.models import RoomStatus

        make_room(room_number="101")
        make_room(room_number="102", status=RoomStatus.MAINTENANCE)

        rooms = room_service.list_all(status=RoomStatus.MAINTENANCE)

        assert [r.room_number for r in rooms] == ["102"]


class TestAvailability:

    def test_counts_by_status(self, as_front_desk, room_service, make_room):
        from core.models import RoomStatus

        make_room(room_number="101")
        make_room(room_number="102", status=RoomStatus.OCCUPIED)
        make_room(room_number="103", status=RoomStatus.BOOKED)
        make_room(room_number="104", status=RoomStatus.OCCUPIED)

        summary = room_service.availability()

        assert summary.total == 4
        assert summary.occupied == 2
        assert summary.booked == 1
        assert summary.occupancy_rate == 50
