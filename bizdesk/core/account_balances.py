"""Account Balances - school and service-provider balances derived from bills and payouts.

Invariants:
    - School balance = received (receipt payments) - invoiced (tax invoice totals);
      negative means the school owes money, positive means it has credit
    - Receipts count their actual payments, never their stored total
    - Provider balance = earned (confirmed/completed booking lines) - paid out
      (payment-type payouts with status paid); positive means the platform owes the provider
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from bizdesk.core.billing import normalize_bill_type, sum_payments, to_amount, first_amount
from bizdesk.core.domain_types import BillType, BookingStatus, PayoutStatus, PayoutType

_EARNING_BOOKING_STATUSES = frozenset({
    BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value,
})


@dataclass
class SchoolBalance:
    total_tax_invoices: float = 0.0
    total_receipts: float = 0.0
    tax_invoice_count: int = 0
    receipt_count: int = 0

    @property
    def net_balance(self) -> float:
        return round(self.total_receipts - self.total_tax_invoices, 2)

    def to_dict(self) -> dict:
        return {
            "total_tax_invoices": self.total_tax_invoices,
            "total_receipts": self.total_receipts,
            "net_balance": self.net_balance,
            "tax_invoice_count": self.tax_invoice_count,
            "receipt_count": self.receipt_count,
        }


@dataclass
class ProviderBalance:
    total_earned: float = 0.0
    total_paid_out: float = 0.0
    booking_count: int = 0
    payout_count: int = 0
    last_booking_date: str | None = None
    last_payout_date: str | None = None
    bookings: list[dict] = field(default_factory=list)

    @property
    def net_balance(self) -> float:
        return round(self.total_earned - self.total_paid_out, 2)

    def to_dict(self) -> dict:
        return {
            "total_earned": self.total_earned,
            "total_paid_out": self.total_paid_out,
            "net_balance": self.net_balance,
            "booking_count": self.booking_count,
            "payout_count": self.payout_count,
            "last_booking_date": self.last_booking_date,
            "last_payout_date": self.last_payout_date,
            "bookings": self.bookings,
        }


def school_balance(bills: Iterable[Mapping]) -> SchoolBalance:
    """Aggregate a school's booking bills. Combined invoice-receipts count on both sides."""
    balance = SchoolBalance()
    for bill in bills:
        bill_type = normalize_bill_type(bill.get("bill_type"))
        if bill_type in (BillType.TAX_INVOICE, BillType.TAX_INVOICE_RECEIPT):
            balance.total_tax_invoices += first_amount(bill, "total_with_tax", "total_amount")
            balance.tax_invoice_count += 1
        if bill_type in (BillType.RECEIPT_ONLY, BillType.TAX_INVOICE_RECEIPT):
            balance.total_receipts += sum_payments(bill.get("payments") or [])
            balance.receipt_count += 1
    balance.total_tax_invoices = round(balance.total_tax_invoices, 2)
    balance.total_receipts = round(balance.total_receipts, 2)
    return balance


def school_balances(
    bills_by_school: Mapping[str, Iterable[Mapping]], school_ids: Iterable[str],
) -> dict[str, float]:
    """Net balance per requested school; schools without bills get 0."""
    result = {school_id: 0.0 for school_id in school_ids}
    for school_id, bills in bills_by_school.items():
        if school_id in result:
            result[school_id] = school_balance(bills).net_balance
    return result


def line_total(line: Mapping) -> float:
    """quantity x days x booked_price; missing quantity/days count as 1."""
    quantity = to_amount(line.get("quantity")) or 1
    days = to_amount(line.get("days")) or 1
    return round(quantity * days * to_amount(line.get("booked_price")), 2)


def provider_balance(
    booking_lines: Iterable[Mapping], payouts: Iterable[Mapping],
) -> ProviderBalance:
    """Earned vs. paid out for one provider.

    booking_lines carry booking_status, booking_reference and trip_date from
    their booking; lines of pending/cancelled bookings do not earn.
    """
    balance = ProviderBalance()
    for line in booking_lines:
        if line.get("booking_status") not in _EARNING_BOOKING_STATUSES:
            continue
        amount = line_total(line)
        balance.total_earned += amount
        balance.booking_count += 1
        trip_date = line.get("trip_date")
        if trip_date and (balance.last_booking_date is None or trip_date > balance.last_booking_date):
            balance.last_booking_date = trip_date
        balance.bookings.append({
            "booking_id": line.get("booking_id"),
            "booking_reference": line.get("booking_reference"),
            "trip_date": trip_date,
            "quantity": line.get("quantity"),
            "days": line.get("days"),
            "booked_price": to_amount(line.get("booked_price")),
            "total_amount": amount,
            "booking_status": line.get("booking_status"),
        })

    for payout in payouts:
        if payout.get("type") != PayoutType.PAYMENT.value:
            continue
        if payout.get("status") != PayoutStatus.PAID.value:
            continue
        balance.total_paid_out += to_amount(payout.get("amount"))
        balance.payout_count += 1
        paid_on = payout.get("payment_date")
        if paid_on and (balance.last_payout_date is None or paid_on > balance.last_payout_date):
            balance.last_payout_date = paid_on

    balance.total_earned = round(balance.total_earned, 2)
    balance.total_paid_out = round(balance.total_paid_out, 2)
    return balance
