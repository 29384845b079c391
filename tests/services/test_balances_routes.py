"""Balance routes - school net balance from its booking bills."""

from uuid import uuid4


async def test_school_balance(client, school, booking_body):
    booking = (await client.post("/api/v1/bookings", json=booking_body)).json()["booking"]
    await client.post(f"/api/v1/bookings/{booking['id']}/confirm")
    await client.post("/api/v1/bills", json={
        "bill_type": "receipt_only", "booking_id": booking["id"],
        "payments": [{"payment_type": "cash", "amount": 2000}],
    })

    res = await client.get(f"/api/v1/schools/{school.id}/balance")
    assert res.status_code == 200
    balance = res.json()
    assert balance["total_tax_invoices"] == 3422.0
    assert balance["total_receipts"] == 2000
    assert balance["net_balance"] == -1422.0

    other = uuid4()
    res = await client.get(
        "/api/v1/schools/balances", params=[("ids", str(school.id)), ("ids", str(other))],
    )
    assert res.json() == {str(school.id): -1422.0, str(other): 0.0}


async def test_unknown_school_is_404(client):
    res = await client.get(f"/api/v1/schools/{uuid4()}/balance")
    assert res.status_code == 404


async def test_provider_type_must_match(client, guide):
    res = await client.get(f"/api/v1/providers/paramedics/{guide.id}/balance")
    assert res.status_code == 404


async def test_pending_booking_does_not_earn(client, guide, booking_body):
    await client.post("/api/v1/bookings", json=booking_body)
    res = await client.get(f"/api/v1/providers/guides/{guide.id}/balance")
    assert res.json()["total_earned"] == 0
