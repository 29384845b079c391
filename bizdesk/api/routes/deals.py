"""Deal routes - creating and deleting deals moves the customer's balance."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.deal import DealCreate, DealDetailResponse, DealResponse
from bizdesk.services import deal_service

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


@router.post("", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
async def create_deal(body: DealCreate, db: AsyncSession = Depends(get_db)):
    return await deal_service.create_deal(db, body)


@router.get("/{deal_id}", response_model=DealDetailResponse)
async def get_deal(deal_id: UUID, db: AsyncSession = Depends(get_db)):
    return await deal_service.get_deal_detail(db, deal_id)


@router.delete("/{deal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deal(deal_id: UUID, db: AsyncSession = Depends(get_db)):
    await deal_service.delete_deal(db, deal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
