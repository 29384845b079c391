"""Deal routes - a deal debits its customer; deleting it restores the balance."""

from uuid import uuid4


async def _balance(client, customer_id):
    return (await client.get(f"/api/v1/customers/{customer_id}")).json()["balance"]


async def test_sale_deal_debits_customer(client, customer, car):
    res = await client.post("/api/v1/deals", json={
        "deal_type": "used_sale", "title": "Corolla sale", "customer_id": str(customer.id),
        "car_id": str(car.id), "selling_price": 10000,
    })
    assert res.status_code == 201
    assert res.json()["car"]["make"] == "Toyota"
    assert await _balance(client, customer.id) == -10000

    txs = (await client.get(f"/api/v1/customers/{customer.id}/transactions")).json()
    assert len(txs) == 1
    assert txs[0]["type"] == "deal_created"
    assert txs[0]["balance_after"] == -10000


async def test_exchange_deal_credits_car_evaluation(client, customer):
    res = await client.post("/api/v1/deals", json={
        "deal_type": "exchange", "title": "Swap", "customer_id": str(customer.id),
        "selling_price": 10000, "customer_car_eval_value": 3000,
    })
    assert res.status_code == 201
    assert await _balance(client, customer.id) == -7000

    deleted = await client.delete(f"/api/v1/deals/{res.json()['id']}")
    assert deleted.status_code == 204
    assert await _balance(client, customer.id) == 0


async def test_intermediary_deal_uses_seller(client, customer):
    res = await client.post("/api/v1/deals", json={
        "deal_type": "intermediary", "title": "Broker", "seller_id": str(customer.id),
        "selling_price": 2000,
    })
    assert res.status_code == 201
    assert await _balance(client, customer.id) == -2000


async def test_sale_without_customer_rejected(client):
    res = await client.post("/api/v1/deals", json={"deal_type": "used_sale", "title": "X"})
    assert res.status_code == 400


async def test_unknown_car_is_404(client, customer):
    res = await client.post("/api/v1/deals", json={
        "deal_type": "used_sale", "title": "X", "customer_id": str(customer.id), "car_id": str(uuid4()),
    })
    assert res.status_code == 404


async def test_deal_shows_outstanding_after_receipts(client, customer):
    deal = (await client.post("/api/v1/deals", json={
        "deal_type": "exchange", "title": "Swap", "customer_id": str(customer.id),
        "selling_price": 10000, "customer_car_eval_value": 3000,
    })).json()
    assert (await client.get(f"/api/v1/deals/{deal['id']}")).json()["outstanding"] == 7000

    await client.post("/api/v1/bills", json={
        "bill_type": "receipt_only", "deal_id": deal["id"],
        "payments": [{"payment_type": "cash", "amount": 2500}],
    })
    await client.post("/api/v1/bills", json={
        "bill_type": "tax_invoice", "deal_id": deal["id"], "subtotal": 1000,
    })
    detail = (await client.get(f"/api/v1/deals/{deal['id']}")).json()
    assert detail["outstanding"] == 4500
    assert detail["title"] == "Swap"
