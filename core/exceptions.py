"""Typed exceptions for hotel back-office failures."""


class HotelError(Exception):
    """Base class for all domain errors surfaced to callers."""


class ValidationError(HotelError):
    """Required input is missing or invalid (no guest, room, date, amount...)."""


class NotFoundError(HotelError):
    """A referenced stay, bill, room, guest or other record does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class ConflictError(HotelError):
    """The request conflicts with the current state of a record."""


class AlreadyClosedError(ConflictError):
    """The stay already has an actual check-out. Closing twice is rejected."""

    def __init__(self, stay_id):
        self.stay_id = stay_id
        super().__init__(f"Stay {stay_id} is already checked out")


class RoomUnavailableError(ConflictError):
    """Room is occupied or under maintenance and cannot take a check-in."""

    def __init__(self, room_number: str, status: str):
        self.room_number = room_number
        self.status = status
        super().__init__(f"Room {room_number} is {status.lower()}")


class InternalError(HotelError):
    """
    Unexpected record store failure.

    Wraps driver errors so callers see one error kind for infrastructure
    trouble. The original exception is chained as __cause__.
    """
