"""
Integration tests for GET/PUT /api/profile and bearer authentication
"""
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.api.utils.jwt import issue_session_token


@pytest.mark.asyncio
async def test_get_profile(client: AsyncClient, registered_user, auth_headers):
    response = await client.get("/api/profile", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["user"] == registered_user["user"]


@pytest.mark.asyncio
async def test_update_profile(client: AsyncClient, registered_user, auth_headers):
    response = await client.put(
        "/api/profile", headers=auth_headers, json={"city": "Mysuru", "pincode": "570001"}
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["city"] == "Mysuru"
    assert user["pincode"] == "570001"
    assert user["street"] == "MG Road"
    assert user["fullName"] == "Asha Rao"

    again = await client.get("/api/profile", headers=auth_headers)
    assert again.json()["user"]["city"] == "Mysuru"


@pytest.mark.asyncio
async def test_update_profile_rejects_bad_pincode(client: AsyncClient, registered_user, auth_headers):
    response = await client.put("/api/profile", headers=auth_headers, json={"pincode": "5700"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_profile_requires_token(client: AsyncClient):
    response = await client.get("/api/profile")

    assert response.status_code == 401
    assert response.json()["error"] == {
        "code": "AUTHENTICATION_ERROR",
        "message": "Authentication required",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["garbage", "a.b.c"])
async def test_profile_rejects_malformed_token(client: AsyncClient, token):
    response = await client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


@pytest.mark.asyncio
async def test_profile_rejects_expired_token(client: AsyncClient, registered_user, signing_context):
    token = issue_session_token(
        signing_context,
        registered_user["user"]["id"],
        now=datetime.now(UTC) - timedelta(days=8),
    )

    response = await client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_profile_of_unknown_user(client: AsyncClient, signing_context):
    token = issue_session_token(signing_context, uuid4())

    response = await client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
