"""Booking routes - priced creation, confirmation, cancellation, tax invoice, payouts."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.bill import BillResponse
from bizdesk.schemas.booking import BookingActionRequest, BookingCreate, BookingResponse
from bizdesk.schemas.payout import PayoutResponse
from bizdesk.services import bill_service, booking_service, payout_service
from bizdesk.services.serializers import booking_dict

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(body: BookingCreate, db: AsyncSession = Depends(get_db)):
    """Create a booking; the response carries the price breakdown."""
    booking, calculation = await booking_service.create_booking(db, body)
    return {"booking": booking_dict(booking), "pricing": calculation.to_dict()}


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: UUID, db: AsyncSession = Depends(get_db)):
    return await booking_service.get_booking_or_404(db, booking_id)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: UUID,
    body: BookingActionRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    performed_by = body.performed_by if body else None
    return await booking_service.confirm_booking(db, booking_id, performed_by)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: UUID,
    body: BookingActionRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    performed_by = body.performed_by if body else None
    return await booking_service.cancel_booking(db, booking_id, performed_by)


@router.post(
    "/{booking_id}/tax-invoice", response_model=BillResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_tax_invoice(booking_id: UUID, db: AsyncSession = Depends(get_db)):
    return await bill_service.generate_tax_invoice_for_booking(db, booking_id)


@router.get("/{booking_id}/payouts", response_model=list[PayoutResponse])
async def list_booking_payouts(booking_id: UUID, db: AsyncSession = Depends(get_db)):
    return await payout_service.list_booking_payouts(db, booking_id)


@router.get("/{booking_id}/payouts/status")
async def booking_payout_status(booking_id: UUID, db: AsyncSession = Depends(get_db)):
    return {"has_payouts": await payout_service.booking_has_payouts(db, booking_id)}


@router.post(
    "/{booking_id}/payouts", response_model=list[PayoutResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_booking_payouts(
    booking_id: UUID,
    body: BookingActionRequest | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Create missing payout records; lines that already have one are skipped."""
    performed_by = body.performed_by if body else None
    return await payout_service.create_booking_payout_records(db, booking_id, performed_by)
