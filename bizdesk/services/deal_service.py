"""Deal Service - deal creation and deletion with their balance movements.

Invariants:
    - Creating a deal debits the customer by selling_price; deleting credits it back
    - Exchange deals also credit (and on deletion debit) the customer's car evaluation
    - Balance changes, activity entry and the deal row commit together
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.config import get_settings
from bizdesk.core.billing import deal_outstanding
from bizdesk.core.customer_balance import (
    customer_id_from_deal, deal_created_change, deal_deleted_change,
    exchange_car_credit_change, exchange_car_credit_reversal,
)
from bizdesk.core.domain_types import ActivityType, DealType
from bizdesk.core.errors import ResourceNotFoundError
from bizdesk.models import Bill, Car, Customer, Deal
from bizdesk.schemas.deal import DealCreate
from bizdesk.services.activity_service import log_activity
from bizdesk.services.balance_service import apply_balance_change
from bizdesk.services.serializers import bill_dict, deal_dict

logger = logging.getLogger(__name__)


async def get_deal_or_404(db: AsyncSession, deal_id: UUID) -> Deal:
    deal = await db.get(Deal, deal_id)
    if deal is None:
        raise ResourceNotFoundError("Deal", str(deal_id))
    return deal


async def get_deal_detail(db: AsyncSession, deal_id: UUID) -> dict:
    deal = await get_deal_or_404(db, deal_id)
    result = await db.execute(select(Bill).where(Bill.deal_id == deal.id))
    bills = [bill_dict(bill) for bill in result.scalars().all()]
    data = deal_dict(deal)
    data["outstanding"] = deal_outstanding(
        data, bills, car_evaluation=deal.customer_car_eval_value,
    )
    return data


async def _customer_name(db: AsyncSession, customer_id: str) -> str:
    customer = await db.get(Customer, UUID(customer_id))
    return customer.name if customer else ""


async def create_deal(db: AsyncSession, body: DealCreate) -> Deal:
    currency = get_settings().currency_symbol
    for field, model in (
        ("customer_id", Customer), ("seller_id", Customer),
        ("buyer_id", Customer), ("car_id", Car),
    ):
        ref = getattr(body, field)
        if ref is not None and await db.get(model, ref) is None:
            raise ResourceNotFoundError(model.__name__, str(ref))

    deal = Deal(**{**body.model_dump(), "deal_type": body.deal_type.value})
    db.add(deal)
    await db.flush()
    await db.refresh(deal)
    data = deal_dict(deal)

    customer_id = customer_id_from_deal(data)
    if customer_id and deal.selling_price > 0:
        await apply_balance_change(db, deal_created_change(
            data["id"], customer_id, deal.selling_price, deal.title, currency,
        ))
    if customer_id and deal.deal_type == DealType.EXCHANGE.value:
        credit = exchange_car_credit_change(
            data["id"], customer_id, deal.customer_car_eval_value,
            await _customer_name(db, customer_id), currency,
        )
        if credit:
            await apply_balance_change(db, credit)

    await log_activity(
        db, ActivityType.DEAL_CREATED, deal=data,
        car=data.get("car"), customer=data.get("customer"),
    )
    await db.commit()
    await db.refresh(deal)
    logger.info(f"Deal created: {deal.title}", extra={"deal_id": data["id"]})
    return deal


async def delete_deal(db: AsyncSession, deal_id: UUID) -> None:
    currency = get_settings().currency_symbol
    deal = await get_deal_or_404(db, deal_id)
    data = deal_dict(deal)

    customer_id = customer_id_from_deal(data)
    if customer_id and deal.selling_price > 0:
        await apply_balance_change(db, deal_deleted_change(
            data["id"], customer_id, deal.selling_price, deal.title, currency,
        ))
    if customer_id and deal.deal_type == DealType.EXCHANGE.value:
        reversal = exchange_car_credit_reversal(
            data["id"], customer_id, deal.customer_car_eval_value,
            await _customer_name(db, customer_id), currency,
        )
        if reversal:
            await apply_balance_change(db, reversal)

    await log_activity(
        db, ActivityType.DEAL_DELETED, deal=data,
        car=data.get("car"), customer=data.get("customer"),
    )
    await db.delete(deal)
    await db.commit()
    logger.info(f"Deal deleted: {deal.title}", extra={"deal_id": data["id"]})
