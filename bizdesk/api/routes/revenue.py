"""Revenue routes - a provider account's revenue views by user id."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.services import revenue_service

router = APIRouter(prefix="/api/v1/services", tags=["revenue"])


@router.get("/{user_id}/revenue")
async def service_revenue(user_id: str, db: AsyncSession = Depends(get_db)):
    return await revenue_service.get_service_revenue(db, user_id)


@router.get("/{user_id}/transactions")
async def service_transactions(
    user_id: str,
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    return await revenue_service.get_service_transactions(db, user_id, limit)


@router.get("/{user_id}/balance")
async def service_balance(user_id: str, db: AsyncSession = Depends(get_db)):
    return await revenue_service.get_service_balance(db, user_id)


@router.get("/{user_id}/revenue-trend")
async def revenue_trend(
    user_id: str,
    months: int | None = Query(None, ge=1, le=36),
    db: AsyncSession = Depends(get_db),
):
    return await revenue_service.get_revenue_trend(db, user_id, months)
