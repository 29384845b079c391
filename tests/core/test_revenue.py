"""Tests for provider revenue statistics and trend."""

from datetime import date

from bizdesk.core.revenue import (
    growth_percent, provider_balance_info, revenue_stats, revenue_trend, shift_month,
)

TODAY = date(2026, 3, 10)
LINES = [
    {"service_type": "guides", "quantity": 2, "days": 1, "booked_price": 100,
     "created_at": "2026-03-02T09:00:00", "payment_status": "paid"},
    {"service_type": "guides", "quantity": 1, "days": 2, "booked_price": 50,
     "created_at": "2026-02-10T09:00:00", "payment_status": "pending"},
    {"service_type": "paramedics", "quantity": None, "days": None, "booked_price": 300,
     "created_at": "2026-03-05T09:00:00", "payment_status": "fully_paid"},
]
PAYMENTS = [
    {"amount": 200, "payment_date": "2026-03-03"},
    {"amount": 100, "payment_date": "2026-03-04"},
    {"amount": 100, "payment_date": "2026-02-20"},
]


def test_growth_percent():
    assert growth_percent(150, 100) == 50.0
    assert growth_percent(5, 0) == 100.0
    assert growth_percent(0, 0) == 0.0


def test_shift_month_across_year():
    assert shift_month(date(2026, 1, 15), -1) == date(2025, 12, 1)


def test_totals_split_paid_and_pending():
    stats = revenue_stats(LINES, PAYMENTS, TODAY)
    assert stats.total_revenue == 600
    assert stats.total_paid == 500
    assert stats.total_pending == 100
    assert stats.total_bills == 3


def test_monthly_revenue_sorted():
    stats = revenue_stats(LINES, PAYMENTS, TODAY)
    assert stats.monthly_revenue == [
        {"month": "2026-02", "revenue": 100},
        {"month": "2026-03", "revenue": 500},
    ]


def test_service_breakdown_percentages():
    stats = revenue_stats(LINES, PAYMENTS, TODAY)
    by_type = {row["service_type"]: row for row in stats.service_breakdown}
    assert by_type["guides"]["count"] == 2
    assert by_type["guides"]["percentage"] == 50.0
    assert by_type["paramedics"]["revenue"] == 300


def test_growth_figures_come_from_data():
    stats = revenue_stats(LINES, PAYMENTS, TODAY)
    assert stats.revenue_growth == 400.0
    assert stats.pending_growth == -100.0
    assert stats.payments_growth == 200.0
    assert stats.average_transaction_growth == 50.0


def test_empty_provider_has_zero_stats():
    stats = revenue_stats([], [], TODAY)
    assert stats.total_revenue == 0
    assert stats.revenue_growth == 0.0
    assert stats.service_breakdown == []


def test_trend_is_oldest_first_with_labels():
    trend = revenue_trend(LINES, PAYMENTS, TODAY, months=3)
    assert [t["month"] for t in trend] == ["2026-01", "2026-02", "2026-03"]
    assert trend[0]["label"] == "Jan 2026"
    assert trend[1]["revenue"] == 100
    assert trend[1]["payments"] == 100
    assert trend[2]["revenue"] == 500
    assert trend[2]["payments"] == 300


def test_balance_info():
    stats = revenue_stats(LINES, PAYMENTS, TODAY)
    info = provider_balance_info(stats, PAYMENTS)
    assert info["total_earnings"] == 600
    assert info["outstanding_amount"] == 100
    assert info["average_transaction_value"] == 133.33
