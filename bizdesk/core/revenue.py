"""Provider Revenue - statistics, trend and balance summary for a service provider.

Invariants:
    - Line revenue = booked_price x quantity x days (missing quantity/days count as 1)
    - A line is paid when its booking payment status is paid or fully_paid
    - Growth figures compare the month containing `today` with the month before it
    - Months are keyed YYYY-MM; every list is ordered oldest first

Design Decisions:
    - All four growth figures are computed from the rows, never estimated
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Mapping

from bizdesk.core.billing import to_amount

_PAID_STATUSES = frozenset({"paid", "fully_paid"})
_MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class RevenueStats:
    total_revenue: float = 0.0
    total_paid: float = 0.0
    total_pending: float = 0.0
    total_bills: int = 0
    revenue_growth: float = 0.0
    payments_growth: float = 0.0
    pending_growth: float = 0.0
    average_transaction_growth: float = 0.0
    monthly_revenue: list[dict] = field(default_factory=list)
    service_breakdown: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total_revenue": self.total_revenue,
            "total_paid": self.total_paid,
            "total_pending": self.total_pending,
            "total_bills": self.total_bills,
            "revenue_growth": self.revenue_growth,
            "payments_growth": self.payments_growth,
            "pending_growth": self.pending_growth,
            "average_transaction_growth": self.average_transaction_growth,
            "monthly_revenue": self.monthly_revenue,
            "service_breakdown": self.service_breakdown,
        }


def growth_percent(current: float, previous: float) -> float:
    if previous > 0:
        return round((current - previous) / previous * 100, 2)
    return 100.0 if current > 0 else 0.0


def month_key(value: object) -> str:
    """YYYY-MM of a date, datetime or ISO string; "" when absent."""
    if value is None:
        return ""
    if isinstance(value, date):
        return value.strftime("%Y-%m")
    return str(value)[:7]


def shift_month(day: date, months: int) -> date:
    index = day.year * 12 + day.month - 1 + months
    return date(index // 12, index % 12 + 1, 1)


def line_revenue(line: Mapping) -> float:
    quantity = to_amount(line.get("quantity")) or 1
    days = to_amount(line.get("days")) or 1
    return round(to_amount(line.get("booked_price")) * quantity * days, 2)


def _is_paid(line: Mapping) -> bool:
    return line.get("payment_status") in _PAID_STATUSES


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def revenue_stats(
    lines: Iterable[Mapping], payments: Iterable[Mapping], today: date,
) -> RevenueStats:
    """Aggregate a provider's booking lines and the payments made on those bookings.

    lines carry service_type, quantity, days, booked_price, created_at and
    their booking's payment_status; payments carry amount and payment_date.
    """
    lines = list(lines)
    payments = list(payments)
    stats = RevenueStats(total_bills=len(lines))
    breakdown: dict[str, dict] = {}
    monthly: dict[str, float] = {}
    pending_monthly: dict[str, float] = {}

    for line in lines:
        amount = line_revenue(line)
        stats.total_revenue += amount
        key = month_key(line.get("created_at"))
        if _is_paid(line):
            stats.total_paid += amount
        else:
            stats.total_pending += amount
            pending_monthly[key] = pending_monthly.get(key, 0.0) + amount

        entry = breakdown.setdefault(line.get("service_type"), {"revenue": 0.0, "count": 0})
        entry["revenue"] += amount
        entry["count"] += 1
        monthly[key] = monthly.get(key, 0.0) + amount

    stats.total_revenue = round(stats.total_revenue, 2)
    stats.total_paid = round(stats.total_paid, 2)
    stats.total_pending = round(stats.total_pending, 2)
    stats.service_breakdown = [
        {
            "service_type": service_type,
            "revenue": round(entry["revenue"], 2),
            "count": entry["count"],
            "percentage": (
                round(entry["revenue"] / stats.total_revenue * 100, 2) if stats.total_revenue > 0 else 0.0
            ),
        }
        for service_type, entry in breakdown.items()
    ]
    stats.monthly_revenue = [
        {"month": key, "revenue": round(monthly[key], 2)} for key in sorted(monthly) if key
    ]

    current = month_key(today)
    previous = month_key(shift_month(today, -1))
    paid_by_month: dict[str, list[float]] = {}
    for payment in payments:
        paid_by_month.setdefault(month_key(payment.get("payment_date")), []).append(
            to_amount(payment.get("amount"))
        )

    stats.revenue_growth = growth_percent(monthly.get(current, 0.0), monthly.get(previous, 0.0))
    stats.payments_growth = growth_percent(
        sum(paid_by_month.get(current, [])), sum(paid_by_month.get(previous, [])),
    )
    stats.pending_growth = growth_percent(
        pending_monthly.get(current, 0.0), pending_monthly.get(previous, 0.0),
    )
    stats.average_transaction_growth = growth_percent(
        _average(paid_by_month.get(current, [])), _average(paid_by_month.get(previous, [])),
    )
    return stats


def revenue_trend(
    lines: Iterable[Mapping], payments: Iterable[Mapping], today: date, months: int = 12,
) -> list[dict]:
    """Revenue booked and payments received per month for the last `months` months."""
    window = [shift_month(today, -offset) for offset in range(months - 1, -1, -1)]
    revenue: dict[str, float] = {}
    received: dict[str, float] = {}
    for line in lines:
        key = month_key(line.get("created_at"))
        revenue[key] = revenue.get(key, 0.0) + line_revenue(line)
    for payment in payments:
        key = month_key(payment.get("payment_date"))
        received[key] = received.get(key, 0.0) + to_amount(payment.get("amount"))

    trend = []
    for month in window:
        key = month_key(month)
        trend.append({
            "month": key,
            "label": f"{_MONTH_LABELS[month.month - 1]} {month.year}",
            "revenue": round(revenue.get(key, 0.0), 2),
            "payments": round(received.get(key, 0.0), 2),
        })
    return trend


def provider_balance_info(stats: RevenueStats, payments: Iterable[Mapping]) -> dict:
    amounts = [to_amount(p.get("amount")) for p in payments]
    return {
        "total_earnings": stats.total_revenue,
        "total_received": stats.total_paid,
        "pending_payments": stats.total_pending,
        "outstanding_amount": round(stats.total_revenue - stats.total_paid, 2),
        "average_transaction_value": round(_average(amounts), 2),
    }
