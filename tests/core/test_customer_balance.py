"""Tests for customer balance deltas - deals, exchange credit, receipts."""

from bizdesk.core.customer_balance import (
    BalanceChange, apply_change, customer_id_from_deal, deal_created_change,
    deal_deleted_change, effective_deal_amount, exchange_car_credit_change,
    exchange_car_credit_reversal, receipt_created_change, receipt_deleted_change,
)
from bizdesk.core.domain_types import BalanceTransactionType


def _receipt(amount, direction="positive"):
    return {
        "id": "b1",
        "bill_direction": direction,
        "payments": [{"payment_type": "cash", "amount": amount}],
    }


def test_apply_change_from_missing_balance():
    change = BalanceChange("c1", -100, BalanceTransactionType.DEAL_CREATED, "d1", "x")
    assert apply_change(None, change) == (0.0, -100.0)


def test_intermediary_deal_falls_back_to_seller():
    deal = {"deal_type": "intermediary", "seller_id": "s1", "buyer_id": "b1"}
    assert customer_id_from_deal(deal) == "s1"


def test_regular_deal_without_customer_moves_nobody():
    assert customer_id_from_deal({"deal_type": "new_sale", "seller_id": "s1"}) is None


def test_deal_created_debits_selling_price():
    change = deal_created_change("d1", "c1", 15000, "Toyota")
    assert change.amount == -15000
    assert change.description == "Deal created: Toyota (₪15000)"


def test_deal_deleted_credits_back():
    assert deal_deleted_change("d1", "c1", 15000, "Toyota").amount == 15000


def test_exchange_credit_and_reversal():
    assert exchange_car_credit_change("d1", "c1", 0, "Dana") is None
    credit = exchange_car_credit_change("d1", "c1", 5000, "Dana")
    reversal = exchange_car_credit_reversal("d1", "c1", 5000, "Dana")
    assert credit.amount == 5000
    assert reversal.amount == -5000
    assert reversal.type == BalanceTransactionType.DEAL_DELETED


def test_effective_amount_deducts_exchange_car_floored_at_zero():
    deal = {"deal_type": "exchange", "customer_car_eval_value": 3000}
    assert effective_deal_amount(deal, 10000) == 7000
    assert effective_deal_amount(deal, 2000) == 0


def test_receipt_within_deal_amount():
    change = receipt_created_change(
        _receipt(500), "c1", "Dana", deal={"deal_type": "new_sale"}, selling_price=1000,
    )
    assert change.amount == 500
    assert change.description.endswith("(towards deal)")


def test_receipt_over_deal_amount_notes_excess():
    change = receipt_created_change(
        _receipt(1500), "c1", "Dana", deal={"deal_type": "new_sale"}, selling_price=1000,
    )
    assert "(₪1000 for deal + ₪500 excess)" in change.description


def test_negative_receipt_is_an_expense():
    change = receipt_created_change(_receipt(500, "negative"), "c1", "Dana")
    assert change.amount == -500
    assert change.description.startswith("Expense/Deduction")


def test_bill_without_money_moves_nothing():
    assert receipt_created_change({"id": "b1", "bill_direction": "positive"}, "c1", "Dana") is None


def test_deleting_receipt_reverses_it():
    bill = _receipt(750)
    created = receipt_created_change(bill, "c1", "Dana", selling_price=1000)
    deleted = receipt_deleted_change(bill, "c1", "Dana", selling_price=1000)
    assert created.amount + deleted.amount == 0
    assert deleted.type == BalanceTransactionType.RECEIPT_DELETED
