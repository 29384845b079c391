"""Provider Payouts - what the platform owes providers and what it has sent them.

Invariants:
    - A booking-type payout is created once per booking line; its amount is
      quantity x days x booked_price
    - Booking-type payouts start pending; a payment-type payout is created paid
      and points back at its booking record through booking_record_id
"""

import logging
from datetime import date
from typing import Iterable, Mapping

from bizdesk.core.billing import plain_number, to_amount
from bizdesk.core.domain_types import PayoutStatus, PayoutType
from bizdesk.core.pricing import rate_type_label

logger = logging.getLogger(__name__)

_PAYMENT_DETAIL_FIELDS = (
    "account_number",
    "account_holder_name",
    "bank_name",
    "transaction_number",
    "reference_number",
    "check_number",
    "check_bank_name",
)


def booking_payout_amount(line: Mapping) -> float:
    return round(
        to_amount(line.get("quantity")) * to_amount(line.get("days")) * to_amount(line.get("booked_price")),
        2,
    )


def plan_booking_payouts(
    booking_reference: str,
    lines: Iterable[Mapping],
    providers: Mapping[str, Mapping],
    existing_line_ids: set[str],
    created_by: str | None,
    today: date,
    default_method: str = "bank_transfer",
    currency: str = "₪",
) -> list[dict]:
    """Pending booking-type payout rows for lines that have none yet.

    providers maps service_id -> {"name", "user_id"}. A line whose provider
    is missing is skipped.
    """
    planned = []
    for line in lines:
        line_id = str(line.get("id"))
        if line_id in existing_line_ids:
            logger.debug(f"Payout already exists for booking line {line_id}")
            continue

        service_id = str(line.get("service_id"))
        provider = providers.get(service_id)
        if provider is None:
            logger.warning(
                f"No provider found for {line.get('service_type')} {service_id}, skipping payout",
                extra={"service_id": service_id},
            )
            continue

        planned.append({
            "type": PayoutType.BOOKING.value,
            "service_type": line.get("service_type"),
            "service_id": service_id,
            "user_id": provider.get("user_id"),
            "service_provider_name": provider.get("name"),
            "amount": booking_payout_amount(line),
            "booking_service_id": line_id,
            "status": PayoutStatus.PENDING.value,
            "description": f"Booking {booking_reference} - {line.get('service_type')} service",
            "notes": (
                f"Quantity: {line.get('quantity')}, Days: {line.get('days')}, "
                f"Rate: {currency}{plain_number(to_amount(line.get('booked_price')))} "
                f"({rate_type_label(line.get('rate_type'))})"
            ),
            "created_by": created_by,
            "payment_method": default_method,
            "payment_date": today.isoformat(),
        })
    return planned


def plan_payment_from_booking_record(
    record: Mapping, details: Mapping, created_by: str | None,
) -> dict:
    """Paid payment-type payout settling one booking-type record."""
    payment = {
        "type": PayoutType.PAYMENT.value,
        "service_type": record.get("service_type"),
        "service_id": record.get("service_id"),
        "user_id": record.get("user_id"),
        "service_provider_name": record.get("service_provider_name"),
        "amount": to_amount(record.get("amount")),
        "payment_method": details.get("payment_method"),
        "payment_date": details.get("payment_date"),
        "booking_service_id": record.get("booking_service_id"),
        "booking_record_id": str(record.get("id")),
        "status": PayoutStatus.PAID.value,
        "description": record.get("description"),
        "notes": details.get("notes") or record.get("notes"),
        "created_by": created_by,
    }
    for name in _PAYMENT_DETAIL_FIELDS:
        payment[name] = details.get(name)
    return payment
