"""
Integration tests for /api/bookings
"""
from uuid import uuid4

import pytest
from httpx import AsyncClient


async def create_booking(client: AsyncClient, headers: dict, payload: dict) -> dict:
    response = await client.post("/api/bookings", headers=headers, json=payload)
    assert response.status_code == 200
    return response.json()["booking"]


@pytest.mark.asyncio
async def test_create_booking(client: AsyncClient, test_data, auth_headers):
    booking = await create_booking(client, auth_headers, test_data.get_copy("create_booking"))

    assert booking["trackingCode"].startswith("RC")
    assert booking["status"] == "Pending"
    assert booking["pickupName"] == "Asha Rao"
    assert booking["dropoffName"] == "Ravi Kumar"
    assert booking["dropoffBuildingName"] is None
    assert booking["packageContents"] == "Books"
    assert booking["vehicleType"] == "bike"
    assert booking["pickupAt"] == "2026-11-02T10:30:00"


@pytest.mark.asyncio
async def test_list_and_get_bookings(client: AsyncClient, test_data, auth_headers):
    first = await create_booking(client, auth_headers, test_data.get_copy("create_booking"))
    second = await create_booking(client, auth_headers, test_data.get_copy("create_booking"))

    response = await client.get("/api/bookings", headers=auth_headers)
    assert response.status_code == 200
    ids = [b["id"] for b in response.json()["bookings"]]
    assert set(ids) == {first["id"], second["id"]}

    response = await client.get(f"/api/bookings/{first['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["booking"]["trackingCode"] == first["trackingCode"]


@pytest.mark.asyncio
async def test_bookings_are_private(client: AsyncClient, test_data, auth_headers):
    booking = await create_booking(client, auth_headers, test_data.get_copy("create_booking"))

    other = test_data.get_copy("register_user", email="b@x.com")
    registered = await client.post("/api/auth/register", json=other)
    other_headers = {"Authorization": f"Bearer {registered.json()['token']}"}

    listing = await client.get("/api/bookings", headers=other_headers)
    assert listing.json()["bookings"] == []

    response = await client.get(f"/api/bookings/{booking['id']}", headers=other_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_unknown_booking(client: AsyncClient, auth_headers):
    response = await client.get(f"/api/bookings/{uuid4()}", headers=auth_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "field,value",
    [("vehicleType", "rocket"), ("pickupPincode", "12"), ("receiverPhone", "12345"), ("senderName", None)],
)
async def test_create_booking_invalid(client: AsyncClient, test_data, auth_headers, field, value):
    payload = test_data.get_copy("create_booking")
    if value is None:
        del payload[field]
    else:
        payload[field] = value

    response = await client.post("/api/bookings", headers=auth_headers, json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_bookings_require_token(client: AsyncClient, test_data):
    response = await client.post("/api/bookings", json=test_data.get_copy("create_booking"))

    assert response.status_code == 401
