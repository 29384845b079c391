"""Bill Service - bill creation, deletion and status changes with their side effects.

Invariants:
    - Bill numbers are unique per type and year: PREFIX-YYYY-NNNNN
    - A bill with a customer moves that customer's balance on creation and
      moves it back on deletion, inside the same transaction
    - Booking receipts reconcile cumulatively: once all receipt payments for a
      booking cover its total, the booking's tax invoice and payment status become paid
    - A booking has at most one tax invoice, whichever path creates it
    - Booking receipts settle against booking.total_amount, the pre-tax total,
      not the invoice total_with_tax; a booking is paid once receipts cover it
    - A booking receipt without an explicit parent points at the booking's tax invoice

Design Decisions:
    - Status of a new bill is derived, never taken from input:
      general=pending, tax_invoice=issued, receipts=complete|incomplete
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.config import get_settings
from bizdesk.core.bill_document import build_bill_document
from bizdesk.core.billing import (
    RECEIPT_TYPES, TAX_TYPES, bill_number_prefix, compute_tax, format_bill_number,
    infer_bill_direction, is_fully_covered, next_bill_sequence, normalize_bill_type,
    receipt_status, sum_payments, validate_bill,
)
from bizdesk.core.customer_balance import (
    customer_id_from_deal, receipt_created_change, receipt_deleted_change,
)
from bizdesk.core.domain_types import (
    ActivityType, BillStatus, BillType, BookingPaymentStatus, Language,
)
from bizdesk.core.errors import (
    BillValidationError, DuplicateTaxInvoiceError, ErrorContext,
    InvalidStateTransitionError, ResourceNotFoundError,
)
from bizdesk.infrastructure.pdf_renderer import render_bill_pdf, resolve_font_path
from bizdesk.models import Bill, BillPayment, Booking, Customer, Deal
from bizdesk.schemas.bill import BillCreate
from bizdesk.services.activity_service import log_activity
from bizdesk.services.balance_service import apply_balance_change
from bizdesk.services.company_service import get_company_info
from bizdesk.services.serializers import bill_dict, deal_dict

logger = logging.getLogger(__name__)

_FINAL_STATUSES = frozenset({BillStatus.CANCELLED.value})


async def get_bill_or_404(db: AsyncSession, bill_id: UUID) -> Bill:
    bill = await db.get(Bill, bill_id)
    if bill is None:
        raise ResourceNotFoundError("Bill", str(bill_id), ErrorContext(bill_id=str(bill_id)))
    return bill


async def list_bills(
    db: AsyncSession,
    bill_type: str | None = None,
    status: str | None = None,
    deal_id: UUID | None = None,
    booking_id: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
) -> list[Bill]:
    query = select(Bill).order_by(Bill.created_at.desc())
    if bill_type:
        query = query.where(Bill.bill_type == normalize_bill_type(bill_type).value)
    if status:
        query = query.where(Bill.status == status)
    if deal_id:
        query = query.where(Bill.deal_id == deal_id)
    if booking_id:
        query = query.where(Bill.booking_id == booking_id)
    result = await db.execute(query.limit(limit).offset(offset))
    return list(result.scalars().all())


async def allocate_bill_number(db: AsyncSession, bill_type: BillType, year: int) -> str:
    prefix = bill_number_prefix(bill_type, year)
    result = await db.execute(
        select(Bill.bill_number).where(Bill.bill_number.like(f"{prefix}%")),
    )
    sequence = next_bill_sequence(result.scalars().all(), bill_type, year)
    return format_bill_number(bill_type, year, sequence)


async def find_tax_invoice(db: AsyncSession, booking_id: UUID) -> Bill | None:
    result = await db.execute(
        select(Bill).where(
            Bill.booking_id == booking_id,
            Bill.bill_type == BillType.TAX_INVOICE.value,
        ).limit(1),
    )
    return result.scalar_one_or_none()


async def _booking_receipts_paid(db: AsyncSession, booking_id: UUID) -> float:
    result = await db.execute(
        select(Bill).where(
            Bill.booking_id == booking_id,
            Bill.bill_type.in_([t.value for t in RECEIPT_TYPES]),
        ),
    )
    return round(sum(sum_payments(bill_dict(b)["payments"]) for b in result.scalars().all()), 2)


async def _reconcile_booking(db: AsyncSession, booking: Booking) -> float:
    """Sync the booking's tax invoice and payment status with its receipts."""
    paid = await _booking_receipts_paid(db, booking.id)
    covered = is_fully_covered(paid, booking.total_amount)
    invoice = await find_tax_invoice(db, booking.id)
    if covered:
        booking.payment_status = BookingPaymentStatus.PAID.value
        if invoice and invoice.status != BillStatus.PAID.value:
            invoice.status = BillStatus.PAID.value
            logger.info(
                f"Tax invoice {invoice.bill_number} paid by receipts",
                extra={"booking_id": str(booking.id), "bill_id": str(invoice.id)},
            )
    else:
        booking.payment_status = BookingPaymentStatus.PENDING.value
        if invoice and invoice.status == BillStatus.PAID.value:
            invoice.status = BillStatus.ISSUED.value
    return paid


async def _customer_for_bill(
    db: AsyncSession, customer_id: str | None,
) -> Customer | None:
    if not customer_id:
        return None
    customer = await db.get(Customer, UUID(customer_id))
    if customer is None:
        raise ResourceNotFoundError("Customer", customer_id, ErrorContext(customer_id=customer_id))
    return customer


async def create_bill(db: AsyncSession, body: BillCreate) -> Bill:
    """Validate, number and persist a bill, then apply its balance and booking effects."""
    settings = get_settings()
    bill_type = normalize_bill_type(body.bill_type)
    direction = infer_bill_direction(bill_type, body.bill_direction)
    payments = [p.model_dump(mode="json") for p in body.payments]
    data = body.model_dump(mode="json", exclude={"payments"})
    validate_bill(bill_type, data, payments)

    deal = await db.get(Deal, body.deal_id) if body.deal_id else None
    if body.deal_id and deal is None:
        raise ResourceNotFoundError("Deal", str(body.deal_id))
    booking = await db.get(Booking, body.booking_id) if body.booking_id else None
    if body.booking_id and booking is None:
        raise ResourceNotFoundError(
            "Booking", str(body.booking_id), ErrorContext(booking_id=str(body.booking_id)),
        )
    if bill_type == BillType.TAX_INVOICE and booking is not None:
        existing = await find_tax_invoice(db, booking.id)
        if existing is not None:
            raise DuplicateTaxInvoiceError(str(booking.id), existing.bill_number)
    parent_bill_id = body.parent_bill_id
    if parent_bill_id is None and booking is not None and bill_type in RECEIPT_TYPES:
        invoice = await find_tax_invoice(db, booking.id)
        parent_bill_id = invoice.id if invoice else None
    deal_data = deal_dict(deal) if deal else None

    customer_id = data.get("customer_id") or (customer_id_from_deal(deal_data) if deal_data else None)
    customer = await _customer_for_bill(db, customer_id)
    customer_name = (
        body.customer_name
        or (customer.name if customer else None)
        or (booking.customer_name if booking else None)
    )

    bill = Bill(
        bill_number=await allocate_bill_number(db, bill_type, datetime.now(timezone.utc).year),
        bill_type=bill_type.value,
        bill_direction=direction.value,
        status=BillStatus.PENDING.value,
        deal_id=body.deal_id,
        booking_id=body.booking_id,
        customer_id=customer.id if customer else None,
        parent_bill_id=parent_bill_id,
        customer_name=customer_name,
        customer_phone=body.customer_phone or (customer.phone if customer else None),
        bill_description=body.bill_description,
        car_details=body.car_details,
        bill_amount=body.bill_amount,
        commission=body.commission,
        due_date=body.due_date,
    )
    if bill_type in TAX_TYPES:
        rate = body.tax_rate if body.tax_rate is not None else settings.tax_rate_percent
        tax = compute_tax(body.subtotal, rate)
        bill.subtotal, bill.tax_rate = tax.net, tax.rate_percent
        bill.tax_amount, bill.total_with_tax = tax.tax, tax.gross
        bill.status = BillStatus.ISSUED.value

    for payment in body.payments:
        bill.payments.append(BillPayment(**payment.model_dump()))
    db.add(bill)
    await db.flush()
    await db.refresh(bill)

    if bill_type in RECEIPT_TYPES:
        if booking is not None:
            paid = await _reconcile_booking(db, booking)
            bill.status = receipt_status(paid, booking.total_amount).value
        elif bill_type == BillType.TAX_INVOICE_RECEIPT:
            bill.status = receipt_status(sum_payments(payments), bill.total_with_tax or 0).value
        else:
            bill.status = BillStatus.COMPLETE.value

    if customer is not None:
        change = receipt_created_change(
            bill_dict(bill), str(customer.id), customer.name,
            deal=deal_data, selling_price=deal.selling_price if deal else None,
            currency=settings.currency_symbol,
        )
        if change:
            await apply_balance_change(db, change)

    await log_activity(db, ActivityType.BILL_CREATED, deal=deal_data)
    await db.commit()
    await db.refresh(bill)
    logger.info(
        f"Bill {bill.bill_number} created ({bill.bill_type}, {bill.status})",
        extra={"bill_id": str(bill.id)},
    )
    return bill


async def delete_bill(db: AsyncSession, bill_id: UUID) -> None:
    settings = get_settings()
    bill = await get_bill_or_404(db, bill_id)
    data = bill_dict(bill)
    deal = await db.get(Deal, bill.deal_id) if bill.deal_id else None
    customer = await db.get(Customer, bill.customer_id) if bill.customer_id else None

    if customer is not None:
        change = receipt_deleted_change(
            data, str(customer.id), customer.name,
            deal=deal_dict(deal) if deal else None,
            selling_price=deal.selling_price if deal else None,
            currency=settings.currency_symbol,
        )
        if change:
            await apply_balance_change(db, change)

    booking = await db.get(Booking, bill.booking_id) if bill.booking_id else None
    await db.delete(bill)
    await db.flush()
    if booking is not None and normalize_bill_type(data["bill_type"]) in RECEIPT_TYPES:
        await _reconcile_booking(db, booking)

    await log_activity(db, ActivityType.BILL_DELETED)
    await db.commit()
    logger.info(f"Bill {data['bill_number']} deleted", extra={"bill_id": data["id"]})


async def update_bill_status(db: AsyncSession, bill_id: UUID, status: BillStatus) -> Bill:
    bill = await get_bill_or_404(db, bill_id)
    if bill.status in _FINAL_STATUSES and status.value != bill.status:
        raise InvalidStateTransitionError(
            "Bill", bill.status, status.value, ErrorContext(bill_id=str(bill_id)),
        )
    bill.status = status.value
    await log_activity(db, ActivityType.BILL_UPDATED)
    await db.commit()
    await db.refresh(bill)
    return bill


async def issue_tax_invoice(db: AsyncSession, booking: Booking) -> Bill:
    """Add the booking's tax invoice (booking total plus tax) to the caller's transaction."""
    settings = get_settings()
    existing = await find_tax_invoice(db, booking.id)
    if existing is not None:
        raise DuplicateTaxInvoiceError(str(booking.id), existing.bill_number)
    if booking.total_amount <= 0:
        raise BillValidationError("Booking has no amount to invoice", "total_amount")

    tax = compute_tax(booking.total_amount, settings.tax_rate_percent)
    bill = Bill(
        bill_number=await allocate_bill_number(
            db, BillType.TAX_INVOICE, datetime.now(timezone.utc).year,
        ),
        bill_type=BillType.TAX_INVOICE.value,
        bill_direction=infer_bill_direction(BillType.TAX_INVOICE).value,
        status=BillStatus.ISSUED.value,
        booking_id=booking.id,
        customer_name=booking.customer_name,
        customer_phone=booking.customer_phone,
        subtotal=tax.net,
        tax_rate=tax.rate_percent,
        tax_amount=tax.tax,
        total_with_tax=tax.gross,
        bill_description=f"Tax Invoice for Booking {booking.booking_reference}",
    )
    db.add(bill)
    await db.flush()
    logger.info(
        f"Tax invoice {bill.bill_number} issued",
        extra={"booking_id": str(booking.id), "bill_id": str(bill.id)},
    )
    return bill


async def generate_tax_invoice_for_booking(db: AsyncSession, booking_id: UUID) -> Bill:
    booking = await db.get(Booking, booking_id)
    if booking is None:
        raise ResourceNotFoundError(
            "Booking", str(booking_id), ErrorContext(booking_id=str(booking_id)),
        )
    bill = await issue_tax_invoice(db, booking)
    await db.commit()
    await db.refresh(bill)
    return bill


async def render_bill_pdf_bytes(
    db: AsyncSession, bill_id: UUID, language: Language | None = None,
) -> tuple[Bill, bytes]:
    settings = get_settings()
    bill = await get_bill_or_404(db, bill_id)
    deal = await db.get(Deal, bill.deal_id) if bill.deal_id else None
    font_path = resolve_font_path(settings.pdf_font_path)
    # the built-in PDF font only covers cp1252, which has no ₪
    currency = settings.currency_symbol if font_path else f"{settings.currency_code} "
    document = build_bill_document(
        bill_dict(bill),
        deal=deal_dict(deal) if deal else None,
        company=await get_company_info(db),
        language=language or Language(settings.document_language),
        currency=currency,
    )
    return bill, render_bill_pdf(document, font_path)
