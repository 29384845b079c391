"""Balance Service - customer ledger writes and school/provider balance reads.

Invariants:
    - apply_balance_change writes the new balance and its transaction row in the
      caller's transaction; the caller commits both or neither
    - School balances read only bills attached to the school's bookings
    - Provider balances read booking lines and payouts of one provider
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.account_balances import ProviderBalance, SchoolBalance, provider_balance, school_balance, school_balances
from bizdesk.core.customer_balance import BalanceChange, apply_change
from bizdesk.core.errors import ErrorContext, ResourceNotFoundError
from bizdesk.models import Bill, Booking, BookingService, Customer, CustomerTransaction, Payout, School, ServiceProvider
from bizdesk.services.serializers import bill_dict

logger = logging.getLogger(__name__)


async def apply_balance_change(db: AsyncSession, change: BalanceChange) -> CustomerTransaction:
    customer = await db.get(Customer, UUID(change.customer_id))
    if customer is None:
        raise ResourceNotFoundError(
            "Customer", change.customer_id,
            ErrorContext(customer_id=change.customer_id),
        )
    before, after = apply_change(customer.balance, change)
    customer.balance = after
    transaction = CustomerTransaction(
        customer_id=customer.id,
        type=change.type.value,
        amount=change.amount,
        balance_before=before,
        balance_after=after,
        reference_id=change.reference_id,
        description=change.description,
    )
    db.add(transaction)
    await db.flush()
    logger.info(
        f"Customer balance {before} -> {after} ({change.type.value})",
        extra={"customer_id": change.customer_id},
    )
    return transaction


async def _school_bills(db: AsyncSession, school_ids: list[UUID]) -> dict[str, list[dict]]:
    result = await db.execute(
        select(Bill, Booking.school_id)
        .join(Booking, Bill.booking_id == Booking.id)
        .where(Booking.school_id.in_(school_ids)),
    )
    grouped: dict[str, list[dict]] = {}
    for bill, school_id in result.all():
        grouped.setdefault(str(school_id), []).append(bill_dict(bill))
    return grouped


async def get_school_balance(db: AsyncSession, school_id: UUID) -> SchoolBalance:
    if await db.get(School, school_id) is None:
        raise ResourceNotFoundError("School", str(school_id))
    bills = await _school_bills(db, [school_id])
    return school_balance(bills.get(str(school_id), []))


async def get_school_balances(db: AsyncSession, school_ids: list[UUID]) -> dict[str, float]:
    if not school_ids:
        return {}
    bills = await _school_bills(db, school_ids)
    return school_balances(bills, [str(s) for s in school_ids])


async def get_provider_balance(
    db: AsyncSession, service_type: str, service_id: UUID,
) -> ProviderBalance:
    provider = await db.get(ServiceProvider, service_id)
    if provider is None or provider.service_type != service_type:
        raise ResourceNotFoundError(service_type, str(service_id))

    result = await db.execute(
        select(BookingService, Booking)
        .join(Booking, BookingService.booking_id == Booking.id)
        .where(BookingService.service_id == service_id),
    )
    lines = [
        {
            "booking_id": str(booking.id),
            "booking_reference": booking.booking_reference,
            "booking_status": booking.status,
            "trip_date": booking.trip_date.isoformat() if booking.trip_date else None,
            "quantity": line.quantity,
            "days": line.days,
            "booked_price": line.booked_price,
        }
        for line, booking in result.all()
    ]
    payouts = await db.execute(
        select(Payout).where(
            Payout.service_id == service_id, Payout.service_type == service_type,
        ),
    )
    payout_rows = [
        {
            "type": p.type,
            "status": p.status,
            "amount": p.amount,
            "payment_date": p.payment_date.isoformat() if p.payment_date else None,
        }
        for p in payouts.scalars().all()
    ]
    return provider_balance(lines, payout_rows)
