"""Core domain models."""

from core.models.guest import Guest, GuestCreate, GuestUpdate
from core.models.room import (
    Room, RoomCreate, RoomUpdate, RoomStatus,
    RoomCategory, RoomCategoryCreate, RoomAvailability,
)
from core.models.reservation import Reservation, ReservationCreate, ReservationUpdate, ReservationStatus
from core.models.stay import Stay, StayCreate
from core.models.bill import (
    Bill, BillCreate, BillStatus, BillTotals, BillDetail,
    LineItem, LineItemCreate, LineItemType,
    Payment, PaymentCreate, PaymentMethod, PaymentResult,
    CheckoutResult,
)
from core.models.requests import (
    CheckInRequest, CheckOutRequest, AddChargeRequest,
    RecordPaymentRequest, CreateBillRequest,
)
from core.models.catalog import CatalogItem, CatalogItemCreate, CatalogItemUpdate, CatalogKind
from core.models.vendor import (
    Vendor, VendorCreate, VendorUpdate, VendorLedger,
    VendorTransaction, VendorTransactionCreate,
    VendorTransactionType, VendorPaymentStatus,
)
from core.models.expense import Expense, ExpenseCreate
from core.models.report import (
    RevenueBreakdown, RevenueReport, OverallReport, DailyRevenue, OccupancyReport,
)

__all__ = [
    # Guest
    "Guest", "GuestCreate", "GuestUpdate",
    # Room
    "Room", "RoomCreate", "RoomUpdate", "RoomStatus",
    "RoomCategory", "RoomCategoryCreate", "RoomAvailability",
    # Reservation
    "Reservation", "ReservationCreate", "ReservationUpdate", "ReservationStatus",
    # Stay
    "Stay", "StayCreate",
    # Bill
    "Bill", "BillCreate", "BillStatus", "BillTotals", "BillDetail",
    "LineItem", "LineItemCreate", "LineItemType",
    "Payment", "PaymentCreate", "PaymentMethod", "PaymentResult",
    "CheckoutResult",
    # Requests
    "CheckInRequest", "CheckOutRequest", "AddChargeRequest",
    "RecordPaymentRequest", "CreateBillRequest",
    # Catalog
    "CatalogItem", "CatalogItemCreate", "CatalogItemUpdate", "CatalogKind",
    # Vendor
    "Vendor", "VendorCreate", "VendorUpdate", "VendorLedger",
    "VendorTransaction", "VendorTransactionCreate",
    "VendorTransactionType", "VendorPaymentStatus",
    # Expense
    "Expense", "ExpenseCreate",
    # Reports
    "RevenueBreakdown", "RevenueReport", "OverallReport", "DailyRevenue", "OccupancyReport",
]
