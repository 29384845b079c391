"""Revenue Service - a provider account's revenue views, keyed by its user id.

Invariants:
    - A user may own several provider rows (one per service type); all are aggregated
    - Payments are bill payments on the bookings those providers served
    - A user with no provider rows gets empty figures, not an error
"""

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.config import get_settings
from bizdesk.core.revenue import provider_balance_info, revenue_stats, revenue_trend
from bizdesk.models import Bill, BillPayment, Booking, BookingService, ServiceProvider

logger = logging.getLogger(__name__)


def _today() -> date:
    return datetime.now(timezone.utc).date()


async def _provider_lines(db: AsyncSession, user_id: str) -> list[dict]:
    providers = await db.execute(
        select(ServiceProvider.id).where(ServiceProvider.user_id == user_id),
    )
    provider_ids = list(providers.scalars().all())
    if not provider_ids:
        logger.info(f"No service providers for user {user_id}")
        return []

    result = await db.execute(
        select(BookingService, Booking)
        .join(Booking, BookingService.booking_id == Booking.id)
        .where(BookingService.service_id.in_(provider_ids))
        .order_by(BookingService.created_at),
    )
    return [
        {
            "id": str(line.id),
            "booking_id": str(booking.id),
            "booking_reference": booking.booking_reference,
            "customer_name": booking.customer_name,
            "service_type": line.service_type,
            "quantity": line.quantity,
            "days": line.days,
            "booked_price": line.booked_price,
            "payment_status": booking.payment_status,
            "booking_status": booking.status,
            "created_at": line.created_at.isoformat(),
        }
        for line, booking in result.all()
    ]


async def _booking_payments(db: AsyncSession, lines: list[dict]) -> list[dict]:
    booking_ids = {line["booking_id"] for line in lines}
    if not booking_ids:
        return []
    result = await db.execute(
        select(BillPayment)
        .join(Bill, BillPayment.bill_id == Bill.id)
        .where(Bill.booking_id.in_([UUID(b) for b in booking_ids])),
    )
    return [
        {
            "amount": p.amount,
            "payment_date": (p.payment_date or p.created_at.date()).isoformat(),
            "payment_type": p.payment_type,
        }
        for p in result.scalars().all()
    ]


async def get_service_revenue(db: AsyncSession, user_id: str) -> dict:
    lines = await _provider_lines(db, user_id)
    payments = await _booking_payments(db, lines)
    return revenue_stats(lines, payments, _today()).to_dict()


async def get_service_transactions(
    db: AsyncSession, user_id: str, limit: int = 50,
) -> list[dict]:
    """Payments received on the provider's bookings, most recent first."""
    lines = await _provider_lines(db, user_id)
    booking_ids = {UUID(line["booking_id"]) for line in lines}
    if not booking_ids:
        return []
    result = await db.execute(
        select(BillPayment, Bill, Booking.booking_reference)
        .join(Bill, BillPayment.bill_id == Bill.id)
        .join(Booking, Bill.booking_id == Booking.id)
        .where(Bill.booking_id.in_(booking_ids))
        .order_by(BillPayment.payment_date.desc(), BillPayment.created_at.desc())
        .limit(limit),
    )
    return [
        {
            "id": str(payment.id),
            "amount": payment.amount,
            "payment_type": payment.payment_type,
            "payment_date": (payment.payment_date or payment.created_at.date()).isoformat(),
            "bill_number": bill.bill_number,
            "customer_name": bill.customer_name or "",
            "status": bill.status,
            "notes": payment.notes,
            "booking_reference": booking_reference,
        }
        for payment, bill, booking_reference in result.all()
    ]


async def get_service_balance(db: AsyncSession, user_id: str) -> dict:
    lines = await _provider_lines(db, user_id)
    payments = await _booking_payments(db, lines)
    stats = revenue_stats(lines, payments, _today())
    return provider_balance_info(stats, payments)


async def get_revenue_trend(
    db: AsyncSession, user_id: str, months: int | None = None,
) -> list[dict]:
    lines = await _provider_lines(db, user_id)
    payments = await _booking_payments(db, lines)
    return revenue_trend(
        lines, payments, _today(), months or get_settings().revenue_trend_months,
    )
