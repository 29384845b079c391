"""Payout routes - paying a provider's booking record exactly once."""

from uuid import uuid4

import pytest


@pytest.fixture
async def record(client, booking_body):
    booking = (await client.post("/api/v1/bookings", json=booking_body)).json()["booking"]
    await client.post(f"/api/v1/bookings/{booking['id']}/confirm")
    payouts = (await client.get(f"/api/v1/bookings/{booking['id']}/payouts")).json()
    return payouts[0]


PAYMENT = {"payment_method": "bank_transfer", "payment_date": "2026-05-10", "bank_name": "Leumi"}


async def test_pay_booking_record(client, record):
    res = await client.post(f"/api/v1/payouts/{record['id']}/pay", json=PAYMENT)
    assert res.status_code == 201
    payment = res.json()
    assert payment["type"] == "payment"
    assert payment["status"] == "paid"
    assert payment["amount"] == 800
    assert payment["booking_record_id"] == record["id"]
    assert payment["payment_date"] == "2026-05-10"


async def test_second_payment_conflicts(client, record):
    await client.post(f"/api/v1/payouts/{record['id']}/pay", json=PAYMENT)
    res = await client.post(f"/api/v1/payouts/{record['id']}/pay", json=PAYMENT)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "PAYOUT_ALREADY_EXISTS"


async def test_unknown_record_is_404(client):
    res = await client.post(f"/api/v1/payouts/{uuid4()}/pay", json=PAYMENT)
    assert res.status_code == 404


async def test_provider_balance_after_payment(client, record):
    await client.post(f"/api/v1/payouts/{record['id']}/pay", json=PAYMENT)
    res = await client.get(f"/api/v1/providers/guides/{record['service_id']}/balance")
    assert res.status_code == 200
    balance = res.json()
    assert balance["total_earned"] == 800
    assert balance["total_paid_out"] == 800
    assert balance["net_balance"] == 0
    assert balance["last_payout_date"] == "2026-05-10"
