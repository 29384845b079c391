"""Error envelope over HTTP - constraint violations and database outages."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from bizdesk.api.error_handlers import register_error_handlers
from bizdesk.core.errors import DatabaseError


async def test_duplicate_booking_reference_is_conflict(client, booking_body):
    booking_body["booking_reference"] = "BK-FIXED-1"
    first = await client.post("/api/v1/bookings", json=booking_body)
    assert first.status_code == 201

    second = await client.post("/api/v1/bookings", json=booking_body)
    assert second.status_code == 409
    error = second.json()["error"]
    assert error["code"] == "DATA_INTEGRITY_ERROR"
    assert error["category"] == "conflict"


async def test_database_error_asks_client_to_retry():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom():
        raise DatabaseError("Connection or operational error", "execute")

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        res = await c.get("/boom")
    assert res.status_code == 503
    assert res.headers["retry-after"] == "5"
    error = res.json()["error"]
    assert error["code"] == "DATABASE_ERROR"
    assert error["severity"] == "critical"
