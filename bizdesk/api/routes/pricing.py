"""Pricing routes - standalone quotes for a prospective booking."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.pricing import PriceQuoteRequest
from bizdesk.services import booking_service

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])


@router.post("/quote")
async def quote(body: PriceQuoteRequest, db: AsyncSession = Depends(get_db)):
    calculation = await booking_service.quote_price(db, body)
    return calculation.to_dict()
