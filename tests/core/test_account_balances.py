"""Tests for school and provider balances."""

from bizdesk.core.account_balances import provider_balance, school_balance, school_balances


SCHOOL_BILLS = [
    {"bill_type": "tax_invoice", "total_with_tax": 1180},
    {"bill_type": "receipt_only", "payments": [{"amount": 500}, {"amount": 200}]},
    {"bill_type": "tax_invoice_receipt", "total_with_tax": 100, "payments": [{"amount": 100}]},
]


def test_school_balance_counts_combined_bills_on_both_sides():
    balance = school_balance(SCHOOL_BILLS)
    assert balance.total_tax_invoices == 1280
    assert balance.total_receipts == 800
    assert balance.net_balance == -480
    assert balance.tax_invoice_count == 2
    assert balance.receipt_count == 2


def test_school_without_bills_reports_zero():
    result = school_balances({"s1": SCHOOL_BILLS}, ["s1", "s2"])
    assert result == {"s1": -480, "s2": 0.0}


def test_provider_balance_earns_only_confirmed_work():
    lines = [
        {"booking_status": "confirmed", "quantity": 2, "days": 3, "booked_price": 100, "trip_date": "2026-03-01"},
        {"booking_status": "pending", "quantity": 5, "days": 5, "booked_price": 100, "trip_date": "2026-05-01"},
        {"booking_status": "completed", "quantity": 1, "days": 1, "booked_price": 50, "trip_date": "2026-04-01"},
    ]
    payouts = [
        {"type": "payment", "status": "paid", "amount": 200, "payment_date": "2026-03-10"},
        {"type": "payment", "status": "pending", "amount": 100, "payment_date": "2026-03-11"},
        {"type": "booking", "status": "paid", "amount": 999, "payment_date": "2026-03-12"},
    ]
    balance = provider_balance(lines, payouts)
    assert balance.total_earned == 650
    assert balance.total_paid_out == 200
    assert balance.net_balance == 450
    assert balance.booking_count == 2
    assert balance.payout_count == 1
    assert balance.last_booking_date == "2026-04-01"
    assert balance.last_payout_date == "2026-03-10"
