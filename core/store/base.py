"""
Record store boundary for the billing engine and front desk.

The engine never talks to a database directly. It is handed a RecordStore
and performs each step of an operation as one call against it. Whether the
steps of an operation land atomically is decided by the caller through
transaction().
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from uuid import UUID

from core.models import (
    Bill, BillCreate, BillTotals,
    CatalogItem,
    LineItem, LineItemCreate,
    Payment, PaymentCreate,
    Reservation, ReservationStatus,
    Room, RoomStatus,
    Stay, StayCreate,
)


class RecordStore(ABC):
    """Per-record create/read/update for everything a stay touches."""

    # -- stays ---------------------------------------------------------------

    @abstractmethod
    def get_stay(self, stay_id: UUID) -> Stay | None: ...

    @abstractmethod
    def list_stays(self, active_only: bool = False, limit: int = 100) -> list[Stay]:
        """Newest check-in first. Active means not yet checked out."""

    @abstractmethod
    def create_stay(self, data: StayCreate) -> Stay: ...

    @abstractmethod
    def close_stay(
        self,
        stay_id: UUID,
        actual_check_out_at: datetime,
        late_checkout: bool,
        late_charges_cents: int,
    ) -> Stay | None:
        """
        Write the check-out fields, only if the stay is still open.

        Returns None when the stay was already closed (or does not exist),
        so a concurrent second check-out cannot overwrite the first.
        """

    # -- rooms and reservations ----------------------------------------------

    @abstractmethod
    def get_room(self, room_id: UUID) -> Room | None:
        """Room joined with its category's current name and base price."""

    @abstractmethod
    def update_room_status(self, room_id: UUID, status: RoomStatus) -> Room: ...

    @abstractmethod
    def get_reservation(self, reservation_id: UUID) -> Reservation | None: ...

    @abstractmethod
    def update_reservation_status(
        self, reservation_id: UUID, status: ReservationStatus
    ) -> Reservation: ...

    # -- bills ---------------------------------------------------------------

    @abstractmethod
    def get_bill(self, bill_id: UUID) -> Bill | None: ...

    @abstractmethod
    def find_bill_by_stay(self, stay_id: UUID) -> Bill | None: ...

    @abstractmethod
    def create_bill(self, data: BillCreate) -> Bill:
        """New bill with zero totals, UNPAID, and a fresh bill number."""

    @abstractmethod
    def update_bill(self, bill_id: UUID, totals: BillTotals) -> Bill: ...

    @abstractmethod
    def create_line_item(self, data: LineItemCreate) -> LineItem: ...

    @abstractmethod
    def list_line_items(self, bill_id: UUID) -> list[LineItem]:
        """Oldest first."""

    @abstractmethod
    def create_payment(self, data: PaymentCreate) -> Payment: ...

    @abstractmethod
    def list_payments(self, bill_id: UUID) -> list[Payment]:
        """Oldest first."""

    # -- catalog -------------------------------------------------------------

    @abstractmethod
    def get_catalog_item(self, item_id: UUID) -> CatalogItem | None: ...

    # -- unit of work --------------------------------------------------------

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Scope in which every call commits or rolls back together.

        Nested scopes join the outermost one.
        """
