"""Balance routes - school and provider account balances."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.domain_types import ServiceType
from bizdesk.infrastructure.database import get_db
from bizdesk.services import balance_service

router = APIRouter(prefix="/api/v1", tags=["balances"])


@router.get("/schools/balances")
async def school_balances(
    ids: list[UUID] = Query([]),
    db: AsyncSession = Depends(get_db),
):
    """Net balance per requested school; schools without bills report 0."""
    return await balance_service.get_school_balances(db, ids)


@router.get("/schools/{school_id}/balance")
async def school_balance(school_id: UUID, db: AsyncSession = Depends(get_db)):
    balance = await balance_service.get_school_balance(db, school_id)
    return balance.to_dict()


@router.get("/providers/{service_type}/{service_id}/balance")
async def provider_balance(
    service_type: ServiceType, service_id: UUID, db: AsyncSession = Depends(get_db),
):
    balance = await balance_service.get_provider_balance(db, service_type.value, service_id)
    return balance.to_dict()
