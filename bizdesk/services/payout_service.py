"""Payout Service - provider payout records for bookings and their payments.

Invariants:
    - Each booking line gets at most one booking-type payout
    - Paying a booking record creates one payment-type payout and marks the record paid
    - A booking record is paid at most once (PayoutAlreadyExistsError)
"""

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.config import get_settings
from bizdesk.core.domain_types import PayoutStatus, PayoutType
from bizdesk.core.errors import (
    ErrorContext, InvalidStateTransitionError, PayoutAlreadyExistsError, ResourceNotFoundError,
)
from bizdesk.core.payouts import plan_booking_payouts, plan_payment_from_booking_record
from bizdesk.models import Booking, Payout, ServiceProvider
from bizdesk.schemas.payout import PayoutPaymentRequest
from bizdesk.services.serializers import booking_dict, payout_dict

logger = logging.getLogger(__name__)

_UUID_FIELDS = ("service_id", "booking_service_id", "booking_record_id")


def _payout_from_plan(planned: dict) -> Payout:
    row = dict(planned)
    for name in _UUID_FIELDS:
        if row.get(name):
            row[name] = UUID(str(row[name]))
    if row.get("payment_date"):
        row["payment_date"] = date.fromisoformat(str(row["payment_date"]))
    return Payout(**row)


async def _booking_or_404(db: AsyncSession, booking_id: UUID) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise ResourceNotFoundError(
            "Booking", str(booking_id), ErrorContext(booking_id=str(booking_id)),
        )
    return booking


async def list_booking_payouts(db: AsyncSession, booking_id: UUID) -> list[Payout]:
    booking = await _booking_or_404(db, booking_id)
    line_ids = [line.id for line in booking.services]
    if not line_ids:
        return []
    result = await db.execute(
        select(Payout)
        .where(Payout.booking_service_id.in_(line_ids))
        .order_by(Payout.created_at),
    )
    return list(result.scalars().all())


async def booking_has_payouts(db: AsyncSession, booking_id: UUID) -> bool:
    booking = await _booking_or_404(db, booking_id)
    line_ids = [line.id for line in booking.services]
    if not line_ids:
        return False
    result = await db.execute(
        select(Payout.id).where(
            Payout.booking_service_id.in_(line_ids),
            Payout.type == PayoutType.BOOKING.value,
        ).limit(1),
    )
    return result.scalar_one_or_none() is not None


async def add_booking_payouts(
    db: AsyncSession, booking: Booking, created_by: str | None,
) -> list[Payout]:
    """Add pending payouts for lines that have none; joins the caller's transaction."""
    settings = get_settings()
    lines = booking_dict(booking)["services"]
    if not lines:
        return []

    service_ids = {line.service_id for line in booking.services}
    providers = await db.execute(
        select(ServiceProvider).where(ServiceProvider.id.in_(service_ids)),
    )
    provider_map = {
        str(p.id): {"name": p.name, "user_id": p.user_id} for p in providers.scalars().all()
    }
    existing = await db.execute(
        select(Payout.booking_service_id).where(
            Payout.booking_service_id.in_([line.id for line in booking.services]),
            Payout.type == PayoutType.BOOKING.value,
        ),
    )
    existing_ids = {str(line_id) for line_id in existing.scalars().all()}

    planned = plan_booking_payouts(
        booking.booking_reference,
        lines,
        provider_map,
        existing_ids,
        created_by,
        datetime.now(timezone.utc).date(),
        default_method=settings.payout_default_method,
        currency=settings.currency_symbol,
    )
    payouts = [_payout_from_plan(row) for row in planned]
    db.add_all(payouts)
    await db.flush()
    logger.info(
        f"Created {len(payouts)} payout records for booking {booking.booking_reference}",
        extra={"booking_id": str(booking.id)},
    )
    return payouts


async def create_booking_payout_records(
    db: AsyncSession, booking_id: UUID, created_by: str | None = None,
) -> list[Payout]:
    booking = await _booking_or_404(db, booking_id)
    payouts = await add_booking_payouts(db, booking, created_by)
    await db.commit()
    for payout in payouts:
        await db.refresh(payout)
    return payouts


async def cancel_pending_booking_payouts(db: AsyncSession, booking: Booking) -> int:
    """Cancel unpaid booking-type payouts of a booking; joins the caller's transaction."""
    line_ids = [line.id for line in booking.services]
    if not line_ids:
        return 0
    result = await db.execute(
        select(Payout).where(
            Payout.booking_service_id.in_(line_ids),
            Payout.type == PayoutType.BOOKING.value,
            Payout.status == PayoutStatus.PENDING.value,
        ),
    )
    payouts = list(result.scalars().all())
    for payout in payouts:
        payout.status = PayoutStatus.CANCELLED.value
    return len(payouts)


async def create_payment_from_booking_record(
    db: AsyncSession, record_id: UUID, body: PayoutPaymentRequest,
) -> Payout:
    """Pay a provider for one booking record."""
    record = await db.get(Payout, record_id)
    if record is None or record.type != PayoutType.BOOKING.value:
        raise ResourceNotFoundError("Booking payout record", str(record_id))
    if record.status == PayoutStatus.CANCELLED.value:
        raise InvalidStateTransitionError("Payout", record.status, PayoutStatus.PAID.value)

    existing = await db.execute(
        select(Payout.id).where(
            Payout.booking_record_id == record.id,
            Payout.type == PayoutType.PAYMENT.value,
        ).limit(1),
    )
    if existing.scalar_one_or_none() is not None:
        raise PayoutAlreadyExistsError(str(record_id))

    planned = plan_payment_from_booking_record(
        payout_dict(record), body.model_dump(mode="json"), body.created_by,
    )
    payment = _payout_from_plan(planned)
    db.add(payment)
    record.status = PayoutStatus.PAID.value
    await db.commit()
    await db.refresh(payment)
    logger.info(
        f"Paid {payment.amount} to {payment.service_provider_name}",
        extra={"service_id": str(payment.service_id)},
    )
    return payment
