"""Bill routes - bills, status changes and PDF documents.

Invariants:
    - GET /bills/{id}/pdf streams application/pdf; language defaults to settings
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.domain_types import Language
from bizdesk.infrastructure.database import get_db
from bizdesk.schemas.bill import BillCreate, BillResponse, BillStatusUpdate
from bizdesk.services import bill_service

router = APIRouter(prefix="/api/v1/bills", tags=["bills"])


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(body: BillCreate, db: AsyncSession = Depends(get_db)):
    return await bill_service.create_bill(db, body)


@router.get("", response_model=list[BillResponse])
async def list_bills(
    bill_type: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    deal_id: UUID | None = Query(None),
    booking_id: UUID | None = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await bill_service.list_bills(
        db, bill_type, status_filter, deal_id, booking_id, limit, offset,
    )


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(bill_id: UUID, db: AsyncSession = Depends(get_db)):
    return await bill_service.get_bill_or_404(db, bill_id)


@router.patch("/{bill_id}/status", response_model=BillResponse)
async def update_bill_status(
    bill_id: UUID, body: BillStatusUpdate, db: AsyncSession = Depends(get_db),
):
    return await bill_service.update_bill_status(db, bill_id, body.status)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(bill_id: UUID, db: AsyncSession = Depends(get_db)):
    await bill_service.delete_bill(db, bill_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{bill_id}/pdf")
async def bill_pdf(
    bill_id: UUID,
    language: Language | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    bill, pdf = await bill_service.render_bill_pdf_bytes(db, bill_id, language)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{bill.bill_number}.pdf"'},
    )
