"""Bill routes - numbering, validation, tax, balance effects, status and PDF."""

from datetime import datetime, timezone

import pytest

YEAR = datetime.now(timezone.utc).year


@pytest.fixture
async def deal(client, customer, car):
    res = await client.post("/api/v1/deals", json={
        "deal_type": "used_sale", "title": "Corolla sale", "customer_id": str(customer.id),
        "car_id": str(car.id), "selling_price": 10000,
    })
    return res.json()


async def _balance(client, customer_id):
    return (await client.get(f"/api/v1/customers/{customer_id}")).json()["balance"]


def _receipt(deal_id, *payments):
    return {"bill_type": "receipt_only", "deal_id": deal_id, "payments": list(payments)}


async def test_receipt_numbering_and_balance(client, customer, deal):
    first = await client.post("/api/v1/bills", json=_receipt(
        deal["id"], {"payment_type": "cash", "amount": 500},
    ))
    assert first.status_code == 201
    assert first.json()["bill_number"] == f"RCT-{YEAR}-00001"
    assert first.json()["status"] == "complete"
    assert first.json()["signed_amount"] == 500
    assert first.json()["customer_name"] == "Dana Levi"

    second = await client.post("/api/v1/bills", json=_receipt(
        deal["id"],
        {"payment_type": "visa", "amount": 300, "visa_last_four": "1234", "visa_installments": 3},
        {
            "payment_type": "check", "amount": 200, "check_number": "55",
            "check_bank_name": "Hapoalim", "check_holder_name": "Dana Levi",
        },
    ))
    assert second.json()["bill_number"] == f"RCT-{YEAR}-00002"
    assert len(second.json()["payments"]) == 2
    assert await _balance(client, customer.id) == -9000


async def test_legacy_type_spelling_normalized(client, deal):
    res = await client.post("/api/v1/bills", json={
        "bill_type": "Receipt", "deal_id": deal["id"],
        "payments": [{"payment_type": "cash", "amount": 100}],
    })
    assert res.status_code == 201
    assert res.json()["bill_type"] == "receipt_only"


async def test_invalid_payment_reports_field(client, deal):
    res = await client.post("/api/v1/bills", json=_receipt(
        deal["id"], {"payment_type": "cash", "amount": 100}, {"payment_type": "cash", "amount": 0},
    ))
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "BILL_VALIDATION_ERROR"
    assert error["field"] == "payments.1.amount"


async def test_check_without_payer_rejected(client, deal):
    res = await client.post("/api/v1/bills", json=_receipt(deal["id"], {
        "payment_type": "check", "amount": 100, "check_number": "55", "check_bank_name": "Leumi",
    }))
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "payments.0.check_holder_name"


async def test_receipt_without_payments_rejected(client, deal):
    res = await client.post("/api/v1/bills", json=_receipt(deal["id"]))
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "payments"


async def test_tax_invoice_is_negative_and_issued(client, customer, deal):
    res = await client.post("/api/v1/bills", json={
        "bill_type": "tax_invoice", "deal_id": deal["id"], "subtotal": 1000,
    })
    assert res.status_code == 201
    bill = res.json()
    assert bill["bill_number"] == f"INV-{YEAR}-00001"
    assert bill["bill_direction"] == "negative"
    assert bill["status"] == "issued"
    assert bill["tax_amount"] == 180.0
    assert bill["total_with_tax"] == 1180.0
    assert bill["signed_amount"] == -1180.0
    assert await _balance(client, customer.id) == -10000


async def test_negative_general_bill_debits_customer(client, customer):
    res = await client.post("/api/v1/bills", json={
        "bill_type": "general", "customer_id": str(customer.id),
        "bill_direction": "negative", "bill_amount": 250,
    })
    assert res.status_code == 201
    assert res.json()["signed_amount"] == -250
    assert res.json()["status"] == "pending"
    assert await _balance(client, customer.id) == -250


async def test_delete_receipt_reverses_balance(client, customer, deal):
    res = await client.post("/api/v1/bills", json=_receipt(
        deal["id"], {"payment_type": "cash", "amount": 500},
    ))
    deleted = await client.delete(f"/api/v1/bills/{res.json()['id']}")
    assert deleted.status_code == 204
    assert await _balance(client, customer.id) == -10000
    assert (await client.get(f"/api/v1/bills/{res.json()['id']}")).status_code == 404


async def test_cancelled_bill_is_final(client, customer):
    res = await client.post("/api/v1/bills", json={
        "bill_type": "general", "customer_id": str(customer.id), "bill_amount": 100,
    })
    bill_id = res.json()["id"]
    cancelled = await client.patch(f"/api/v1/bills/{bill_id}/status", json={"status": "cancelled"})
    assert cancelled.json()["status"] == "cancelled"

    res = await client.patch(f"/api/v1/bills/{bill_id}/status", json={"status": "paid"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STATE_TRANSITION"


async def test_bill_cannot_reference_deal_and_booking(client, deal):
    res = await client.post("/api/v1/bills", json={
        "bill_type": "general", "bill_amount": 10, "deal_id": deal["id"],
        "booking_id": deal["id"],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_bills_filters_by_type(client, deal):
    await client.post("/api/v1/bills", json=_receipt(deal["id"], {"payment_type": "cash", "amount": 5}))
    await client.post("/api/v1/bills", json={
        "bill_type": "tax_invoice", "deal_id": deal["id"], "subtotal": 100,
    })
    res = await client.get("/api/v1/bills", params={"bill_type": "tax_invoice"})
    assert [b["bill_type"] for b in res.json()] == ["tax_invoice"]
    res = await client.get("/api/v1/bills", params={"deal_id": deal["id"]})
    assert len(res.json()) == 2


async def test_bill_pdf(client, deal):
    res = await client.post("/api/v1/bills", json=_receipt(
        deal["id"], {"payment_type": "cash", "amount": 500},
    ))
    bill = res.json()
    pdf = await client.get(f"/api/v1/bills/{bill['id']}/pdf", params={"language": "en"})
    assert pdf.status_code == 200
    assert pdf.headers["content-type"] == "application/pdf"
    assert f'filename="{bill["bill_number"]}.pdf"' in pdf.headers["content-disposition"]
    assert pdf.content.startswith(b"%PDF")
