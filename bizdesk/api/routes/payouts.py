"""Payout routes - paying a provider's booking record."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.payout import PayoutPaymentRequest, PayoutResponse
from bizdesk.services import payout_service

router = APIRouter(prefix="/api/v1/payouts", tags=["payouts"])


@router.post(
    "/{record_id}/pay", response_model=PayoutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def pay_booking_record(
    record_id: UUID, body: PayoutPaymentRequest, db: AsyncSession = Depends(get_db),
):
    return await payout_service.create_payment_from_booking_record(db, record_id, body)
