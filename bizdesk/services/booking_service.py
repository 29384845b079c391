"""Booking Service - priced booking creation and the booking lifecycle.

Invariants:
    - total_amount is computed from destination pricing and provider rates, never accepted
    - Confirming a pending booking issues its tax invoice and provider payout
      records in the same transaction
    - Cancelling cancels the booking's unpaid payout records
"""

import logging
import secrets
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.domain_types import BookingPaymentStatus, BookingStatus, ServiceType
from bizdesk.core.errors import ErrorContext, InvalidStateTransitionError, ResourceNotFoundError
from bizdesk.core.pricing import (
    BookingPriceCalculation, DestinationPricing, ServiceSelection, SubService,
    calculate_booking_price, service_rate, validate_pricing_inputs,
)
from bizdesk.models import Booking, BookingService, Destination, ServiceProvider
from bizdesk.schemas.booking import BookingCreate, BookingServiceInput
from bizdesk.schemas.pricing import PriceQuoteRequest
from bizdesk.services.bill_service import find_tax_invoice, issue_tax_invoice
from bizdesk.services.payout_service import add_booking_payouts, cancel_pending_booking_payouts

logger = logging.getLogger(__name__)

_PROVIDER_RATE_FIELDS = (
    "hourly_rate", "daily_rate", "regional_rate", "overnight_rate", "price", "pricing_data",
)


def generate_booking_reference() -> str:
    """BK-YYYYMMDD-XXXXXX with a random hex suffix."""
    today = datetime.now(timezone.utc).strftime("%Y%m%d")
    return f"BK-{today}-{secrets.token_hex(3).upper()}"


async def get_booking_or_404(db: AsyncSession, booking_id: UUID) -> Booking:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise ResourceNotFoundError(
            "Booking", str(booking_id), ErrorContext(booking_id=str(booking_id)),
        )
    return booking


async def load_destination_pricing(
    db: AsyncSession, destination_id: UUID | None,
) -> DestinationPricing | None:
    if destination_id is None:
        return None
    destination = await db.get(Destination, destination_id)
    if destination is None:
        raise ResourceNotFoundError("Destination", str(destination_id))
    pricing = destination.pricing or {}
    return DestinationPricing(
        student=float(pricing.get("student") or 0), crew=float(pricing.get("crew") or 0),
    )


async def _selection(db: AsyncSession, item: BookingServiceInput) -> ServiceSelection:
    provider = await db.get(ServiceProvider, item.service_id)
    if provider is None or provider.service_type != item.service_type.value:
        raise ResourceNotFoundError(item.service_type.value, str(item.service_id))
    unit_price = item.unit_price
    if unit_price is None:
        rates = {name: getattr(provider, name) for name in _PROVIDER_RATE_FIELDS}
        unit_price = service_rate(rates, item.rate_type)
    return ServiceSelection(
        id=str(provider.id),
        name=provider.name,
        type=ServiceType(item.service_type),
        quantity=item.quantity,
        days=item.days,
        unit_price=unit_price,
        rate_type=item.rate_type,
        sub_services=[SubService(**sub.model_dump()) for sub in item.sub_services],
    )


def quote_selections(body: PriceQuoteRequest) -> list[ServiceSelection]:
    return [
        ServiceSelection(
            id=s.id, name=s.name, type=s.type, quantity=s.quantity, days=s.days,
            unit_price=s.unit_price, rate_type=s.rate_type,
            sub_services=[SubService(**sub.model_dump()) for sub in s.sub_services],
        )
        for s in body.services
    ]


async def quote_price(db: AsyncSession, body: PriceQuoteRequest) -> BookingPriceCalculation:
    """Price a prospective booking without persisting anything."""
    if body.destination_pricing is not None:
        pricing = DestinationPricing(**body.destination_pricing.model_dump())
    else:
        pricing = await load_destination_pricing(db, body.destination_id)
    selections = quote_selections(body)
    validate_pricing_inputs(body.number_of_students, body.number_of_crew, selections)
    return calculate_booking_price(
        pricing, body.number_of_students, body.number_of_crew, selections,
    )


async def create_booking(
    db: AsyncSession, body: BookingCreate,
) -> tuple[Booking, BookingPriceCalculation]:
    pricing = await load_destination_pricing(db, body.destination_id)
    selections = [await _selection(db, item) for item in body.services]
    validate_pricing_inputs(body.number_of_students, body.number_of_crew, selections)
    calculation = calculate_booking_price(
        pricing, body.number_of_students, body.number_of_crew, selections,
    )

    booking = Booking(
        booking_reference=body.booking_reference or generate_booking_reference(),
        school_id=body.school_id,
        destination_id=body.destination_id,
        customer_name=body.customer_name,
        customer_phone=body.customer_phone,
        trip_date=body.trip_date,
        number_of_students=body.number_of_students,
        number_of_crew=body.number_of_crew,
        total_amount=calculation.total_price,
        status=BookingStatus.PENDING.value,
        payment_status=BookingPaymentStatus.PENDING.value,
        notes=body.notes,
        created_by=body.created_by,
    )
    for selection, item in zip(selections, body.services):
        booking.services.append(BookingService(
            service_type=selection.type.value,
            service_id=item.service_id,
            quantity=selection.quantity,
            days=selection.days,
            booked_price=selection.unit_price,
            rate_type=selection.rate_type.value,
            sub_services=[sub.model_dump() for sub in item.sub_services],
        ))
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    logger.info(
        f"Booking {booking.booking_reference} created: {calculation.total_price}",
        extra={"booking_id": str(booking.id)},
    )
    return booking, calculation


async def confirm_booking(
    db: AsyncSession, booking_id: UUID, performed_by: str | None = None,
) -> Booking:
    booking = await get_booking_or_404(db, booking_id)
    if booking.status != BookingStatus.PENDING.value:
        raise InvalidStateTransitionError(
            "Booking", booking.status, BookingStatus.CONFIRMED.value,
            ErrorContext(booking_id=str(booking_id)),
        )
    booking.status = BookingStatus.CONFIRMED.value

    if booking.total_amount > 0 and await find_tax_invoice(db, booking.id) is None:
        await issue_tax_invoice(db, booking)
    await add_booking_payouts(db, booking, performed_by or booking.created_by)

    await db.commit()
    await db.refresh(booking)
    logger.info(
        f"Booking {booking.booking_reference} confirmed",
        extra={"booking_id": str(booking.id)},
    )
    return booking


async def cancel_booking(
    db: AsyncSession, booking_id: UUID, performed_by: str | None = None,
) -> Booking:
    booking = await get_booking_or_404(db, booking_id)
    if booking.status in (BookingStatus.CANCELLED.value, BookingStatus.COMPLETED.value):
        raise InvalidStateTransitionError(
            "Booking", booking.status, BookingStatus.CANCELLED.value,
            ErrorContext(booking_id=str(booking_id)),
        )
    booking.status = BookingStatus.CANCELLED.value
    cancelled = await cancel_pending_booking_payouts(db, booking)
    await db.commit()
    await db.refresh(booking)
    logger.info(
        f"Booking {booking.booking_reference} cancelled by {performed_by or 'unknown'}"
        f" ({cancelled} payouts cancelled)",
        extra={"booking_id": str(booking.id)},
    )
    return booking
