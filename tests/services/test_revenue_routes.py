"""Revenue routes - a provider account's revenue by user id."""


async def _confirmed_booking(client, booking_body):
    booking = (await client.post("/api/v1/bookings", json=booking_body)).json()["booking"]
    await client.post(f"/api/v1/bookings/{booking['id']}/confirm")
    return booking


async def test_revenue_for_provider_user(client, booking_body):
    await _confirmed_booking(client, booking_body)
    res = await client.get("/api/v1/services/u1/revenue")
    assert res.status_code == 200
    stats = res.json()
    assert stats["total_revenue"] == 800
    assert stats["total_pending"] == 800
    assert stats["total_paid"] == 0
    assert stats["total_bills"] == 1
    assert stats["service_breakdown"][0]["service_type"] == "guides"


async def test_paid_booking_counts_as_paid(client, booking_body):
    booking = await _confirmed_booking(client, booking_body)
    await client.post("/api/v1/bills", json={
        "bill_type": "receipt_only", "booking_id": booking["id"],
        "payments": [{"payment_type": "cash", "amount": 2900}],
    })
    stats = (await client.get("/api/v1/services/u1/revenue")).json()
    assert stats["total_paid"] == 800

    balance = (await client.get("/api/v1/services/u1/balance")).json()
    assert balance["total_received"] == 800
    assert balance["outstanding_amount"] == 0


async def test_transactions_are_booking_payments(client, booking_body):
    booking = await _confirmed_booking(client, booking_body)
    assert (await client.get("/api/v1/services/u1/transactions")).json() == []

    for amount, day in ((1000, "2026-03-01"), (1900, "2026-04-15")):
        await client.post("/api/v1/bills", json={
            "bill_type": "receipt_only", "booking_id": booking["id"],
            "payments": [{
                "payment_type": "cash", "amount": amount, "payment_date": day, "notes": "trip",
            }],
        })

    txs = (await client.get("/api/v1/services/u1/transactions")).json()
    assert [t["amount"] for t in txs] == [1900, 1000]
    latest = txs[0]
    assert latest["payment_type"] == "cash"
    assert latest["payment_date"] == "2026-04-15"
    assert latest["bill_number"].startswith("RCT-")
    assert latest["customer_name"] == booking["customer_name"]
    assert latest["status"] == "complete"
    assert latest["notes"] == "trip"
    assert latest["booking_reference"] == booking["booking_reference"]

    limited = (await client.get("/api/v1/services/u1/transactions", params={"limit": 1})).json()
    assert [t["amount"] for t in limited] == [1900]


async def test_revenue_trend(client, booking_body):
    await _confirmed_booking(client, booking_body)
    trend = (await client.get("/api/v1/services/u1/revenue-trend", params={"months": 3})).json()
    assert len(trend) == 3
    assert trend[-1]["revenue"] == 800


async def test_unknown_user_gets_empty_figures(client):
    stats = (await client.get("/api/v1/services/nobody/revenue")).json()
    assert stats["total_revenue"] == 0
    assert (await client.get("/api/v1/services/nobody/transactions")).json() == []
