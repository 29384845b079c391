"""Customer Service - customer records and their balance ledger."""

import logging
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.core.domain_types import ActivityType
from bizdesk.core.errors import CustomerHasDealsError, ErrorContext, ResourceNotFoundError
from bizdesk.models import Customer, CustomerTransaction, Deal
from bizdesk.schemas.customer import CustomerCreate
from bizdesk.services.activity_service import log_activity

logger = logging.getLogger(__name__)


async def get_customer_or_404(db: AsyncSession, customer_id: UUID) -> Customer:
    customer = await db.get(Customer, customer_id)
    if customer is None:
        raise ResourceNotFoundError(
            "Customer", str(customer_id), ErrorContext(customer_id=str(customer_id)),
        )
    return customer


async def create_customer(db: AsyncSession, body: CustomerCreate) -> Customer:
    customer = Customer(**body.model_dump())
    db.add(customer)
    await log_activity(db, ActivityType.CUSTOMER_ADDED)
    await db.commit()
    await db.refresh(customer)
    logger.info(f"Customer created: {customer.name}", extra={"customer_id": str(customer.id)})
    return customer


async def list_customers(
    db: AsyncSession, search: str | None = None, limit: int = 50, offset: int = 0,
) -> list[Customer]:
    query = select(Customer).order_by(Customer.name)
    if search:
        query = query.where(Customer.name.ilike(f"%{search}%"))
    result = await db.execute(query.limit(limit).offset(offset))
    return list(result.scalars().all())


async def list_transactions(db: AsyncSession, customer_id: UUID) -> list[CustomerTransaction]:
    await get_customer_or_404(db, customer_id)
    result = await db.execute(
        select(CustomerTransaction)
        .where(CustomerTransaction.customer_id == customer_id)
        .order_by(CustomerTransaction.created_at.desc()),
    )
    return list(result.scalars().all())


async def delete_customer(db: AsyncSession, customer_id: UUID) -> None:
    """Delete a customer and their ledger; refused while any deal names them."""
    customer = await get_customer_or_404(db, customer_id)
    deal_count = await db.scalar(
        select(func.count(Deal.id)).where(or_(
            Deal.customer_id == customer_id,
            Deal.seller_id == customer_id,
            Deal.buyer_id == customer_id,
        )),
    )
    if deal_count:
        raise CustomerHasDealsError(str(customer_id), deal_count)
    await db.delete(customer)
    await log_activity(db, ActivityType.CUSTOMER_DELETED)
    await db.commit()
    logger.info(f"Customer deleted: {customer.name}", extra={"customer_id": str(customer_id)})
