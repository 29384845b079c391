"""Domain Types - enumerations for every status/type column in the system.

Invariants:
    - All valid states encoded as Enums - no raw string matching in business rules
    - Enum values equal the strings stored in the database and sent over the API

Design Decisions:
    - str Enums: serialize to JSON and compare against DB strings without custom encoders
"""

from enum import Enum


# ─── Billing ─────────────────────────────────────────────────────

class BillType(str, Enum):
    """Canonical bill types after normalization (see billing.normalize_bill_type)."""
    GENERAL = "general"
    TAX_INVOICE = "tax_invoice"
    RECEIPT_ONLY = "receipt_only"
    TAX_INVOICE_RECEIPT = "tax_invoice_receipt"


class BillDirection(str, Enum):
    """Ledger direction. Negative bills reduce the customer's balance."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


class BillStatus(str, Enum):
    PENDING = "pending"
    ISSUED = "issued"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"


class PaymentType(str, Enum):
    CASH = "cash"
    VISA = "visa"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"


# ─── Dealership ──────────────────────────────────────────────────

class DealType(str, Enum):
    NEW_SALE = "new_sale"
    USED_SALE = "used_sale"
    NEW_USED_SALE_TAX_INCLUSIVE = "new_used_sale_tax_inclusive"
    EXCHANGE = "exchange"
    INTERMEDIARY = "intermediary"
    FINANCING_ASSISTANCE_INTERMEDIARY = "financing_assistance_intermediary"


class BalanceTransactionType(str, Enum):
    """Reason recorded on a customer_transactions row."""
    DEAL_CREATED = "deal_created"
    DEAL_DELETED = "deal_deleted"
    RECEIPT_CREATED = "receipt_created"
    RECEIPT_DELETED = "receipt_deleted"


# ─── Travel bookings ─────────────────────────────────────────────

class ServiceType(str, Enum):
    """Service provider categories. Values double as legacy table names."""
    GUIDES = "guides"
    PARAMEDICS = "paramedics"
    SECURITY_COMPANIES = "security_companies"
    EXTERNAL_ENTERTAINMENT_COMPANIES = "external_entertainment_companies"
    TRAVEL_COMPANIES = "travel_companies"
    EDUCATION_PROGRAMS = "education_programs"


class RateType(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    REGIONAL = "regional"
    OVERNIGHT = "overnight"
    FIXED = "fixed"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingPaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PayoutType(str, Enum):
    """booking = amount owed to a provider; payment = money actually sent."""
    BOOKING = "booking"
    PAYMENT = "payment"


class PayoutStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


# ─── Audit / presentation ────────────────────────────────────────

class ActivityType(str, Enum):
    CAR_ADDED = "car_added"
    CAR_UPDATED = "car_updated"
    CAR_DELETED = "car_deleted"
    CAR_RECEIVED_FROM_CLIENT = "car_received_from_client"
    DEAL_CREATED = "deal_created"
    DEAL_UPDATED = "deal_updated"
    DEAL_DELETED = "deal_deleted"
    BILL_CREATED = "bill_created"
    BILL_UPDATED = "bill_updated"
    BILL_DELETED = "bill_deleted"
    CUSTOMER_ADDED = "customer_added"
    CUSTOMER_UPDATED = "customer_updated"
    CUSTOMER_DELETED = "customer_deleted"
    PROVIDER_ADDED = "provider_added"
    PROVIDER_UPDATED = "provider_updated"
    PROVIDER_DELETED = "provider_deleted"


class Language(str, Enum):
    """Document languages. Arabic and Hebrew render right-to-left."""
    EN = "en"
    HE = "he"
    AR = "ar"

    @property
    def is_rtl(self) -> bool:
        return self in (Language.HE, Language.AR)
