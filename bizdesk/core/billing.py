"""Billing Rules - bill type normalization, direction, tax math, payment reconciliation.

Invariants:
    - Bills and payments are plain dicts shaped like their API serialization
    - A bill's payments come from the explicit `payments` argument, else from
      bill["payments"] / bill["bill_payments"]; an empty list means legacy fields apply
    - Tax invoices are always NEGATIVE: they raise what the customer owes
    - Every monetary result is rounded to 2 decimals
    - Amount fields tolerate None, "" and numeric strings (legacy rows store text)

Design Decisions:
    - Legacy single-payment columns (cash_amount, visa_amount, ...) are still read:
      rows written before multi-payment bills never got bill_payments children
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from bizdesk.core.domain_types import BillDirection, BillStatus, BillType, PaymentType
from bizdesk.core.errors import BillValidationError

logger = logging.getLogger(__name__)

_BILL_TYPE_ALIASES: dict[str, BillType] = {
    "general": BillType.GENERAL,
    "general_bill": BillType.GENERAL,
    "receipt": BillType.RECEIPT_ONLY,
    "receipt_only": BillType.RECEIPT_ONLY,
    "tax_invoice": BillType.TAX_INVOICE,
    "tax": BillType.TAX_INVOICE,
    "tax_invoice_receipt": BillType.TAX_INVOICE_RECEIPT,
    "tax_receipt": BillType.TAX_INVOICE_RECEIPT,
    "invoice_receipt": BillType.TAX_INVOICE_RECEIPT,
}

RECEIPT_TYPES = frozenset({BillType.RECEIPT_ONLY, BillType.TAX_INVOICE_RECEIPT})
TAX_TYPES = frozenset({BillType.TAX_INVOICE, BillType.TAX_INVOICE_RECEIPT})

# Order matters: descriptions list methods in this order
_LEGACY_PAYMENT_FIELDS = (
    ("visa_amount", "Visa"),
    ("transfer_amount", "Transfer"),
    ("check_amount", "Check"),
    ("cash_amount", "Cash"),
    ("bank_amount", "Bank"),
)

# Details a payment must carry before it can go on a receipt, in reporting order
_REQUIRED_PAYMENT_DETAILS: dict[PaymentType, tuple[str, ...]] = {
    PaymentType.BANK_TRANSFER: (
        "transfer_account_number", "transfer_holder_name", "bank_name", "transfer_number",
    ),
    PaymentType.CHECK: ("check_number", "check_bank_name", "check_holder_name"),
}

_BILL_NUMBER_PREFIXES: dict[BillType, str] = {
    BillType.GENERAL: "GEN",
    BillType.TAX_INVOICE: "INV",
    BillType.RECEIPT_ONLY: "RCT",
    BillType.TAX_INVOICE_RECEIPT: "IRC",
}


@dataclass(frozen=True)
class TaxBreakdown:
    """Net (pre-tax), tax and gross (tax-inclusive) amounts of one charge."""
    net: float
    tax: float
    gross: float
    rate_percent: float


# ─── Primitives ──────────────────────────────────────────────────

def to_amount(value: object) -> float:
    """Coerce a stored amount to float. None, "", and unparsable text count as 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def plain_number(value: float) -> str:
    """Render an amount without trailing zeros: 500.0 -> '500', 99.5 -> '99.5'."""
    return f"{round(value, 2):.2f}".rstrip("0").rstrip(".")


def enum_value(value: object) -> object:
    """Plain value of a str Enum member (formatting and hashing differ from str)."""
    return value.value if isinstance(value, Enum) else value


def first_amount(bill: Mapping, *fields: str) -> float:
    for name in fields:
        if bill.get(name) not in (None, ""):
            return to_amount(bill.get(name))
    return 0.0


def payment_rows(bill: Mapping, payments: Iterable[Mapping] | None) -> list[Mapping]:
    if payments is not None:
        return list(payments)
    return list(bill.get("payments") or bill.get("bill_payments") or [])


def _apply_direction(amount: float, direction: BillDirection | str | None) -> float:
    if direction == BillDirection.NEGATIVE or direction == "negative":
        return -abs(amount)
    return abs(amount)


# ─── Type and direction ──────────────────────────────────────────

def normalize_bill_type(raw: str | None) -> BillType:
    """Map any stored/legacy bill type spelling onto a canonical BillType."""
    key = (raw or "").strip().lower()
    bill_type = _BILL_TYPE_ALIASES.get(key)
    if bill_type is None:
        logger.warning(f"Unknown bill type '{raw}', defaulting to 'general'")
        return BillType.GENERAL
    return bill_type


def infer_bill_direction(
    bill_type: BillType, requested: BillDirection | str | None = None,
) -> BillDirection:
    """Tax invoices are charges (negative); everything else honours the request."""
    if bill_type == BillType.TAX_INVOICE:
        return BillDirection.NEGATIVE
    if requested is None or requested == "":
        return BillDirection.POSITIVE
    return BillDirection(requested)


# ─── Tax ─────────────────────────────────────────────────────────

def compute_tax(net: float, rate_percent: float) -> TaxBreakdown:
    """Tax on top of a pre-tax amount."""
    net = round(to_amount(net), 2)
    tax = round(net * rate_percent / 100, 2)
    return TaxBreakdown(net=net, tax=tax, gross=round(net + tax, 2), rate_percent=rate_percent)


def split_gross(gross: float, rate_percent: float) -> TaxBreakdown:
    """Split a tax-inclusive price into its net and tax parts."""
    gross = round(to_amount(gross), 2)
    net = round(gross / (1 + rate_percent / 100), 2)
    return TaxBreakdown(net=net, tax=round(gross - net, 2), gross=gross, rate_percent=rate_percent)


# ─── Payment totals ──────────────────────────────────────────────

def sum_payments(payments: Iterable[Mapping]) -> float:
    return round(sum(to_amount(p.get("amount")) for p in payments), 2)


def legacy_payment_total(bill: Mapping, include_bill_amount: bool = False) -> float:
    """Sum of the single-payment columns used before multi-payment bills."""
    total = sum(to_amount(bill.get(name)) for name, _ in _LEGACY_PAYMENT_FIELDS)
    if include_bill_amount:
        total += to_amount(bill.get("bill_amount"))
    return round(total, 2)


def total_payment_amount(bill: Mapping, payments: Iterable[Mapping] | None = None) -> float:
    """Signed total a bill moves through the customer's balance.

    The payments list wins over legacy columns; general bills contribute
    bill_amount through the legacy path.
    """
    rows = payment_rows(bill, payments)
    if rows:
        total = sum_payments(rows)
    else:
        total = legacy_payment_total(bill, include_bill_amount=True)
    return _apply_direction(total, bill.get("bill_direction"))


def signed_bill_amount(bill: Mapping, payments: Iterable[Mapping] | None = None) -> float:
    """Ledger value of a bill as shown in bill tables (negative = charge)."""
    bill_type = normalize_bill_type(bill.get("bill_type"))
    direction = bill.get("bill_direction")

    if bill_type == BillType.GENERAL:
        return _apply_direction(to_amount(bill.get("bill_amount")), direction)
    if bill_type == BillType.TAX_INVOICE:
        return -abs(first_amount(bill, "total_with_tax", "total_amount"))

    rows = payment_rows(bill, payments)
    total = sum_payments(rows) if rows else legacy_payment_total(bill)
    return _apply_direction(total, direction)


def payment_description(
    bill: Mapping, payments: Iterable[Mapping] | None = None, currency: str = "₪",
) -> str:
    """Human-readable list of payment methods, e.g. 'cash: ₪500, visa: ₪300'."""
    rows = payment_rows(bill, payments)
    parts: list[str] = []
    if rows:
        for p in rows:
            amount = to_amount(p.get("amount"))
            if amount > 0:
                parts.append(f"{enum_value(p.get('payment_type'))}: {currency}{plain_number(amount)}")
    else:
        for name, label in _LEGACY_PAYMENT_FIELDS:
            amount = to_amount(bill.get(name))
            if amount > 0:
                parts.append(f"{label}: {currency}{plain_number(amount)}")
    return ", ".join(parts) or "Payment"


# ─── Reconciliation ──────────────────────────────────────────────

def deal_outstanding(
    deal: Mapping, bills: Iterable[Mapping], car_evaluation: float = 0.0,
) -> float:
    """What the customer still owes on a deal after positive bills.

    Exchange deals are reduced by the evaluation of the car taken from the
    customer. Tax invoices are charges and never count as payments.
    A negative result means the customer overpaid.
    """
    due = to_amount(deal.get("selling_price")) or to_amount(deal.get("amount"))
    if deal.get("deal_type") == "exchange":
        due -= to_amount(car_evaluation)

    paid = 0.0
    for bill in bills:
        if bill.get("bill_direction") == BillDirection.NEGATIVE.value:
            continue
        bill_type = normalize_bill_type(bill.get("bill_type"))
        if bill_type == BillType.GENERAL:
            paid += to_amount(bill.get("bill_amount"))
        elif bill_type in RECEIPT_TYPES:
            paid += sum_payments(payment_rows(bill, None))
    return round(due - paid, 2)


def is_fully_covered(paid: float, due: float) -> bool:
    return round(paid, 2) >= round(due, 2)


def receipt_status(paid: float, due: float) -> BillStatus:
    """Receipt against a booking: complete once it covers the amount due."""
    return BillStatus.COMPLETE if is_fully_covered(paid, due) else BillStatus.INCOMPLETE


# ─── Numbering ───────────────────────────────────────────────────

def bill_number_prefix(bill_type: BillType, year: int) -> str:
    return f"{_BILL_NUMBER_PREFIXES[bill_type]}-{year}-"


def format_bill_number(bill_type: BillType, year: int, sequence: int) -> str:
    return f"{bill_number_prefix(bill_type, year)}{sequence:05d}"


def next_bill_sequence(existing_numbers: Iterable[str], bill_type: BillType, year: int) -> int:
    """1 + highest sequence already issued for this type and year."""
    pattern = re.compile(rf"^{_BILL_NUMBER_PREFIXES[bill_type]}-{year}-(\d+)$")
    highest = 0
    for number in existing_numbers:
        match = pattern.match(number or "")
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


# ─── Validation ──────────────────────────────────────────────────

def validate_bill(bill_type: BillType, bill: Mapping, payments: list[Mapping]) -> None:
    """Raise BillValidationError on the first rule a new bill violates."""
    if bill_type == BillType.GENERAL and to_amount(bill.get("bill_amount")) <= 0:
        raise BillValidationError("General bills need a positive bill_amount", "bill_amount")

    if bill_type in TAX_TYPES and to_amount(bill.get("subtotal")) <= 0:
        raise BillValidationError("Tax invoices need a positive subtotal", "subtotal")

    if bill_type in RECEIPT_TYPES and not payments:
        raise BillValidationError("Receipts need at least one payment", "payments")

    for index, payment in enumerate(payments):
        field = f"payments.{index}"
        if to_amount(payment.get("amount")) <= 0:
            raise BillValidationError("Payment amount must be positive", f"{field}.amount")
        payment_type = enum_value(payment.get("payment_type"))
        if payment_type not in {t.value for t in PaymentType}:
            raise BillValidationError(
                f"Unknown payment type '{payment.get('payment_type')}'", f"{field}.payment_type",
            )
        for detail in _REQUIRED_PAYMENT_DETAILS.get(PaymentType(payment_type), ()):
            if not str(payment.get(detail) or "").strip():
                raise BillValidationError(
                    f"{payment_type} payments need {detail}", f"{field}.{detail}",
                )
        last_four = payment.get("visa_last_four")
        if last_four and not re.fullmatch(r"\d{4}", str(last_four)):
            raise BillValidationError("visa_last_four must be 4 digits", f"{field}.visa_last_four")
