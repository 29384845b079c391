"""Customer routes - creation, search, ledger and deletion."""

from uuid import uuid4


async def test_create_customer(client):
    res = await client.post("/api/v1/customers", json={"name": "  Noa Cohen ", "phone": "052-1"})
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Noa Cohen"
    assert body["balance"] == 0.0


async def test_blank_name_is_validation_error(client):
    res = await client.post("/api/v1/customers", json={"name": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    assert res.json()["error"]["details"][0]["field"] == "body.name"


async def test_search_customers(client):
    for name in ("Avi Levi", "Ben Cohen", "Dana Levi"):
        await client.post("/api/v1/customers", json={"name": name})
    res = await client.get("/api/v1/customers", params={"search": "levi"})
    assert [c["name"] for c in res.json()] == ["Avi Levi", "Dana Levi"]


async def test_unknown_customer_is_404(client):
    res = await client.get(f"/api/v1/customers/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_delete_customer(client, customer):
    res = await client.delete(f"/api/v1/customers/{customer.id}")
    assert res.status_code == 204
    assert (await client.get(f"/api/v1/customers/{customer.id}")).status_code == 404


async def test_transactions_empty_for_new_customer(client, customer):
    res = await client.get(f"/api/v1/customers/{customer.id}/transactions")
    assert res.status_code == 200
    assert res.json() == []


async def test_customer_with_deal_cannot_be_deleted(client, customer, car):
    await client.post("/api/v1/deals", json={
        "deal_type": "intermediary", "title": "Broker", "seller_id": str(customer.id),
        "car_id": str(car.id), "selling_price": 2000,
    })
    res = await client.delete(f"/api/v1/customers/{customer.id}")
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "CUSTOMER_HAS_DEALS"
    assert error["context"]["customer_id"] == str(customer.id)
    assert (await client.get(f"/api/v1/customers/{customer.id}")).status_code == 200
