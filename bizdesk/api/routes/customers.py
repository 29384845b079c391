"""Customer routes - customer records and their balance transactions."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.customer import (
    CustomerCreate, CustomerResponse, CustomerTransactionResponse,
)
from bizdesk.services import customer_service

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(body: CustomerCreate, db: AsyncSession = Depends(get_db)):
    return await customer_service.create_customer(db, body)


@router.get("", response_model=list[CustomerResponse])
async def list_customers(
    search: str | None = Query(None, max_length=100),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await customer_service.list_customers(db, search, limit, offset)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(customer_id: UUID, db: AsyncSession = Depends(get_db)):
    return await customer_service.get_customer_or_404(db, customer_id)


@router.get(
    "/{customer_id}/transactions", response_model=list[CustomerTransactionResponse],
)
async def list_transactions(customer_id: UUID, db: AsyncSession = Depends(get_db)):
    """Balance ledger, newest first."""
    return await customer_service.list_transactions(db, customer_id)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: UUID, db: AsyncSession = Depends(get_db)):
    await customer_service.delete_customer(db, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
