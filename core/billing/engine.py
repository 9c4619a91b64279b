"""
Stay billing engine.

Owns every write that changes what a guest owes: opening a bill at
check-in, posting charges, closing a stay with its room and late checkout
lines, and recording payments. After each of those the bill's subtotal,
tax, total and status are recomputed from its line items and payments, so
the stored figures never drift from what the bill actually holds.
"""

import logging
from contextlib import nullcontext
from datetime import datetime
from uuid import UUID

from core.audit import AuditLogger, AuditAction, compute_changes
from core.billing.rules import (
    compute_totals,
    count_nights,
    is_late,
    late_charge,
    room_line_description,
)
from core.config import BillingConfig
from core.exceptions import AlreadyClosedError, NotFoundError, ValidationError
from core.models import (
    AddChargeRequest,
    Bill, BillCreate, BillDetail,
    CheckoutResult,
    LineItem, LineItemCreate, LineItemType,
    Payment, PaymentCreate, PaymentMethod, PaymentResult,
    RecordPaymentRequest,
    Stay,
)
from core.store.base import RecordStore
from utils.timezone import now_utc

logger = logging.getLogger(__name__)

ADVANCE_PAYMENT_NOTE = "Advance Payment at Check-in"
LATE_CHECKOUT_DESCRIPTION = "Late Checkout Charges"


class StayBillingEngine:
    """Bill lifecycle for stays and standalone bills."""

    def __init__(
        self,
        store: RecordStore,
        audit: AuditLogger,
        config: BillingConfig | None = None,
    ):
        self.store = store
        self.audit = audit
        self.config = config or BillingConfig()

    def unit_of_work(self):
        """
        Scope for a multi-step operation.

        A store transaction when atomic_operations is on, otherwise each
        store call stands on its own.
        """
        if self.config.atomic_operations:
            return self.store.transaction()
        return nullcontext()

    # -- bills ---------------------------------------------------------------

    def create_bill(self, guest_id: UUID, stay_id: UUID | None = None) -> Bill:
        """Empty UNPAID bill for a guest, optionally linked to a stay."""
        bill = self.store.create_bill(BillCreate(guest_id=guest_id, stay_id=stay_id))

        self.audit.log_change(
            entity_type="bill",
            entity_id=bill.id,
            action=AuditAction.CREATE,
            changes={"created": bill.model_dump(mode="json")}
        )

        logger.info("Created bill %s for guest %s", bill.bill_number, guest_id)
        return bill

    def get_bill_detail(self, bill_id: UUID) -> BillDetail:
        """
        Bill with its items and payments.

        Raises:
            NotFoundError: If the bill does not exist
        """
        bill = self._require_bill(bill_id)
        return BillDetail(
            bill=bill,
            items=self.store.list_line_items(bill_id),
            payments=self.store.list_payments(bill_id),
        )

    def open(self, stay: Stay, advance_cents: int = 0) -> Bill:
        """
        Open the bill for a new stay.

        An advance is taken as a CASH payment straight away. With nothing
        charged yet the bill then reads PARTIALLY_PAID.
        """
        if advance_cents < 0:
            raise ValidationError("Advance payment cannot be negative")

        with self.unit_of_work():
            bill = self.create_bill(stay.guest_id, stay.id)

            if advance_cents > 0:
                self._append_payment(
                    bill.id, advance_cents, PaymentMethod.CASH, ADVANCE_PAYMENT_NOTE
                )
                bill = self._recompute(bill)

        return bill

    def add_charge(self, request: AddChargeRequest) -> Bill:
        """
        Post a charge to a bill and recompute its totals.

        A catalog item supplies the price, name and line type when the
        request leaves them out.

        Raises:
            NotFoundError: If the bill or catalog item does not exist
            ValidationError: If price, description or type is missing and
                no catalog item can supply it
        """
        with self.unit_of_work():
            bill = self._require_bill(request.bill_id)

            unit_price_cents = request.unit_price_cents
            description = request.description
            line_type = request.type

            if request.catalog_item_id is not None:
                catalog_item = self.store.get_catalog_item(request.catalog_item_id)
                if catalog_item is None:
                    raise NotFoundError("Catalog item", request.catalog_item_id)
                if unit_price_cents is None:
                    unit_price_cents = catalog_item.price_cents
                if description is None:
                    description = catalog_item.name
                if line_type is None:
                    line_type = catalog_item.kind.line_item_type

            if line_type is None:
                raise ValidationError("Charge needs a type or a catalog item")
            if unit_price_cents is None:
                raise ValidationError("Charge needs a unit price or a catalog item")
            if description is None:
                raise ValidationError("Charge needs a description or a catalog item")

            self._append_line(LineItemCreate(
                bill_id=bill.id,
                type=line_type,
                description=description,
                quantity=request.quantity,
                unit_price_cents=unit_price_cents,
                total_cents=request.quantity * unit_price_cents,
                catalog_item_id=request.catalog_item_id,
            ))
            return self._recompute(bill)

    def close(self, stay_id: UUID, now: datetime | None = None) -> CheckoutResult:
        """
        Close a stay: bill the nights and any late checkout.

        Releasing the room is left to the caller.

        Raises:
            NotFoundError: If the stay or its room does not exist
            AlreadyClosedError: If the stay is already checked out
        """
        now = now or now_utc()

        with self.unit_of_work():
            stay = self.store.get_stay(stay_id)
            if stay is None:
                raise NotFoundError("Stay", stay_id)
            if stay.is_closed:
                raise AlreadyClosedError(stay_id)

            room = self.store.get_room(stay.room_id)
            if room is None:
                raise NotFoundError("Room", stay.room_id)

            # Late tiers use the category price even under a custom rate
            base_price_cents = room.base_price_cents or 0
            rate_cents = stay.custom_rate_cents
            if rate_cents is None:
                rate_cents = base_price_cents

            nights = count_nights(stay.check_in_at, now)
            late = is_late(stay.expected_check_out_at, now)
            late_cents = late_charge(
                stay.expected_check_out_at, now, base_price_cents, self.config
            )

            closed = self.store.close_stay(stay_id, now, late, late_cents)
            if closed is None:
                # Lost a race with another check-out
                raise AlreadyClosedError(stay_id)

            self.audit.log_change(
                entity_type="stay",
                entity_id=stay_id,
                action=AuditAction.UPDATE,
                changes=compute_changes(
                    stay.model_dump(mode="json"),
                    closed.model_dump(mode="json")
                )
            )

            bill = self.store.find_bill_by_stay(stay_id)
            if bill is None:
                bill = self.create_bill(stay.guest_id, stay_id)

            self._append_line(LineItemCreate(
                bill_id=bill.id,
                type=LineItemType.ROOM,
                description=room_line_description(
                    room.category_name, room.room_number, nights, stay.custom_rate_cents
                ),
                quantity=nights,
                unit_price_cents=rate_cents,
                total_cents=nights * rate_cents,
                room_id=room.id,
            ))

            if late_cents > 0:
                self._append_line(LineItemCreate(
                    bill_id=bill.id,
                    type=LineItemType.OTHER,
                    description=LATE_CHECKOUT_DESCRIPTION,
                    quantity=1,
                    unit_price_cents=late_cents,
                    total_cents=late_cents,
                ))

            bill = self._recompute(bill)

        logger.info(
            "Closed stay %s: %d night(s), late=%s, late charge %d, bill %s total %d",
            stay_id, nights, late, late_cents, bill.bill_number, bill.total_cents
        )
        return CheckoutResult(stay=closed, bill=bill)

    def record_payment(self, request: RecordPaymentRequest) -> PaymentResult:
        """
        Record a payment against a bill.

        Remaining is total minus paid and goes negative on overpayment.

        Raises:
            ValidationError: If the amount is not positive
            NotFoundError: If the bill does not exist
        """
        if request.amount_cents <= 0:
            raise ValidationError("Payment amount must be greater than zero")

        with self.unit_of_work():
            bill = self._require_bill(request.bill_id)
            payment = self._append_payment(
                bill.id, request.amount_cents, request.method, request.note
            )
            updated = self._recompute(bill)

        total_paid = sum(p.amount_cents for p in self.store.list_payments(bill.id))

        logger.info(
            "Recorded %s payment of %d on bill %s (status %s)",
            request.method.value, request.amount_cents, bill.bill_number, updated.status.value
        )

        return PaymentResult(
            payment=payment,
            total_paid_cents=total_paid,
            remaining_cents=updated.total_cents - total_paid,
            status=updated.status,
        )

    # -- internals -----------------------------------------------------------

    def _require_bill(self, bill_id: UUID) -> Bill:
        bill = self.store.get_bill(bill_id)
        if bill is None:
            raise NotFoundError("Bill", bill_id)
        return bill

    def _append_line(self, data: LineItemCreate) -> LineItem:
        item = self.store.create_line_item(data)
        self.audit.log_change(
            entity_type="bill_item",
            entity_id=item.id,
            action=AuditAction.CREATE,
            changes={"created": data.model_dump(mode="json", exclude_none=True)}
        )
        return item

    def _append_payment(
        self, bill_id: UUID, amount_cents: int, method: PaymentMethod, note: str | None
    ) -> Payment:
        payment = self.store.create_payment(PaymentCreate(
            bill_id=bill_id, amount_cents=amount_cents, method=method, note=note
        ))
        self.audit.log_change(
            entity_type="payment",
            entity_id=payment.id,
            action=AuditAction.CREATE,
            changes={"created": payment.model_dump(mode="json")}
        )
        return payment

    def _recompute(self, bill: Bill) -> Bill:
        """Write back totals and status derived from the bill's current contents."""
        totals = compute_totals(
            (item.total_cents for item in self.store.list_line_items(bill.id)),
            (p.amount_cents for p in self.store.list_payments(bill.id)),
            self.config,
        )
        updated = self.store.update_bill(bill.id, totals)

        changes = compute_changes(
            bill.model_dump(mode="json", include={"subtotal_cents", "tax_cents", "total_cents", "status"}),
            totals.model_dump(mode="json")
        )
        if changes:
            self.audit.log_change(
                entity_type="bill",
                entity_id=bill.id,
                action=AuditAction.UPDATE,
                changes=changes
            )
        return updated
