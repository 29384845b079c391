"""Customer Balance Rules - balance deltas for deals and receipts.

Invariants:
    - Balance sign: positive = customer has credit, negative = customer owes
    - Every change function returns a BalanceChange (or None when nothing moves);
      services apply it and record a customer_transactions row
    - receipt_deleted_change exactly reverses receipt_created_change for the same inputs

Design Decisions:
    - Deal debits use selling_price: the amount the customer agreed to pay
    - Exchange deals reduce the effective deal amount by the car evaluation, floored at 0
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

from bizdesk.core.billing import (
    payment_description, plain_number, to_amount, total_payment_amount,
)
from bizdesk.core.domain_types import BalanceTransactionType, BillDirection, DealType


@dataclass(frozen=True)
class BalanceChange:
    """One movement of a customer's balance."""
    customer_id: str
    amount: float
    type: BalanceTransactionType
    reference_id: str
    description: str


def apply_change(current: float | None, change: BalanceChange) -> tuple[float, float]:
    """Return (balance_before, balance_after)."""
    before = round(to_amount(current), 2)
    return before, round(before + change.amount, 2)


def customer_id_from_deal(deal: Mapping) -> str | None:
    """Customer whose balance a deal moves. Intermediary deals fall back to seller, then buyer."""
    if deal.get("customer_id"):
        return str(deal["customer_id"])
    if deal.get("deal_type") == DealType.INTERMEDIARY.value:
        for key in ("seller_id", "buyer_id"):
            if deal.get(key):
                return str(deal[key])
    return None


# ─── Deals ───────────────────────────────────────────────────────

def deal_created_change(
    deal_id: str, customer_id: str, selling_price: float, title: str, currency: str = "₪",
) -> BalanceChange:
    price = to_amount(selling_price)
    return BalanceChange(
        customer_id=customer_id,
        amount=-price,
        type=BalanceTransactionType.DEAL_CREATED,
        reference_id=deal_id,
        description=f"Deal created: {title} ({currency}{plain_number(price)})",
    )


def deal_deleted_change(
    deal_id: str, customer_id: str, selling_price: float, title: str, currency: str = "₪",
) -> BalanceChange:
    price = to_amount(selling_price)
    return BalanceChange(
        customer_id=customer_id,
        amount=price,
        type=BalanceTransactionType.DEAL_DELETED,
        reference_id=deal_id,
        description=f"Deal deleted: {title} ({currency}{plain_number(price)})",
    )


def exchange_car_credit_change(
    deal_id: str, customer_id: str, car_evaluation: float, customer_name: str,
    currency: str = "₪",
) -> BalanceChange | None:
    """Credit for the customer's own car taken in an exchange deal."""
    value = to_amount(car_evaluation)
    if value <= 0:
        return None
    return BalanceChange(
        customer_id=customer_id,
        amount=value,
        type=BalanceTransactionType.DEAL_CREATED,
        reference_id=deal_id,
        description=(
            f"Credit for customer car in exchange deal: {customer_name} "
            f"({currency}{plain_number(value)})"
        ),
    )


def exchange_car_credit_reversal(
    deal_id: str, customer_id: str, car_evaluation: float, customer_name: str,
    currency: str = "₪",
) -> BalanceChange | None:
    """Undo exchange_car_credit_change when the deal is deleted."""
    value = to_amount(car_evaluation)
    if value <= 0:
        return None
    return BalanceChange(
        customer_id=customer_id,
        amount=-value,
        type=BalanceTransactionType.DEAL_DELETED,
        reference_id=deal_id,
        description=(
            f"Reversed credit for customer car in exchange deal: {customer_name} "
            f"({currency}{plain_number(value)})"
        ),
    )


# ─── Receipts ────────────────────────────────────────────────────

def effective_deal_amount(deal: Mapping | None, selling_price: float | None) -> float:
    """Deal amount a payment is measured against (exchange car value deducted)."""
    amount = to_amount(selling_price)
    if deal and deal.get("deal_type") == DealType.EXCHANGE.value:
        amount = max(0.0, amount - to_amount(deal.get("customer_car_eval_value")))
    return round(amount, 2)


def receipt_created_change(
    bill: Mapping,
    customer_id: str,
    customer_name: str,
    payments: Iterable[Mapping] | None = None,
    deal: Mapping | None = None,
    selling_price: float | None = None,
    currency: str = "₪",
) -> BalanceChange | None:
    """Balance movement for a new bill. None when the bill carries no money."""
    payments = None if payments is None else list(payments)
    amount = total_payment_amount(bill, payments)
    if amount == 0:
        return None

    methods = payment_description(bill, payments, currency)
    if bill.get("bill_direction") == BillDirection.NEGATIVE.value:
        return BalanceChange(
            customer_id=customer_id,
            amount=-abs(amount),
            type=BalanceTransactionType.RECEIPT_CREATED,
            reference_id=str(bill.get("id")),
            description=f"Expense/Deduction for {customer_name}: {methods}",
        )

    due = effective_deal_amount(deal, selling_price)
    if due > 0 and amount <= due:
        note = " (towards deal)"
    elif due > 0:
        excess = round(amount - due, 2)
        note = (
            f" ({currency}{plain_number(due)} for deal + "
            f"{currency}{plain_number(excess)} excess)"
        )
    elif deal and deal.get("deal_type") == DealType.EXCHANGE.value:
        note = " (exchange deal - car value credited)"
    else:
        note = ""

    return BalanceChange(
        customer_id=customer_id,
        amount=amount,
        type=BalanceTransactionType.RECEIPT_CREATED,
        reference_id=str(bill.get("id")),
        description=f"Payment received from {customer_name}: {methods}{note}",
    )


def receipt_deleted_change(
    bill: Mapping,
    customer_id: str,
    customer_name: str,
    payments: Iterable[Mapping] | None = None,
    deal: Mapping | None = None,
    selling_price: float | None = None,
    currency: str = "₪",
) -> BalanceChange | None:
    """Reverse of receipt_created_change for the same bill."""
    payments = None if payments is None else list(payments)
    amount = total_payment_amount(bill, payments)
    if amount == 0:
        return None

    methods = payment_description(bill, payments, currency)
    if bill.get("bill_direction") == BillDirection.NEGATIVE.value:
        return BalanceChange(
            customer_id=customer_id,
            amount=abs(amount),
            type=BalanceTransactionType.RECEIPT_DELETED,
            reference_id=str(bill.get("id")),
            description=f"Reversed expense/deduction for {customer_name}: {methods}",
        )

    due = effective_deal_amount(deal, selling_price)
    if due > 0 and amount <= due:
        note = " (was towards deal)"
    elif due > 0:
        excess = round(amount - due, 2)
        note = (
            f" (was {currency}{plain_number(due)} for deal + "
            f"{currency}{plain_number(excess)} excess)"
        )
    else:
        note = ""

    return BalanceChange(
        customer_id=customer_id,
        amount=-amount,
        type=BalanceTransactionType.RECEIPT_DELETED,
        reference_id=str(bill.get("id")),
        description=f"Reversed payment from {customer_name}: {methods}{note}",
    )
