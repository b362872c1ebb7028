"""Bearer authentication on protected routes."""

import uuid
from datetime import timedelta

import pytest

from notevault.security.jwt import create_access_token


@pytest.mark.asyncio
async def test_missing_token_is_unauthenticated(client):
    response = await client.get("/api/v1/notes")

    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json() == {
        "success": False,
        "error": "unauthenticated",
        "message": "Missing bearer token",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Bearer not-a-jwt", "Basic dXNlcjpwYXNz"])
async def test_bad_credentials_are_unauthenticated(client, header):
    response = await client.get("/api/v1/notes", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["error"] == "unauthenticated"


@pytest.mark.asyncio
async def test_expired_token(client, alice):
    token = create_access_token(
        alice.id, alice.email, alice.username, expires_delta=timedelta(seconds=-1)
    )
    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_valid_token_resolves_user(client, alice, alice_headers):
    response = await client.get("/api/v1/auth/me", headers=alice_headers)

    assert response.status_code == 200
    assert response.json()["data"]["id"] == str(alice.id)


@pytest.mark.asyncio
async def test_token_for_unknown_user(client):
    token = create_access_token(uuid.uuid4(), "ghost@example.com", "ghost")
    response = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401

    created = await client.post(
        "/api/v1/notes",
        json={"title": "t", "content": "c"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert created.status_code == 401
    assert created.json()["error"] == "unauthenticated"


@pytest.mark.asyncio
async def test_deactivated_user_loses_access(client, session, alice, alice_headers):
    alice.is_active = False
    await session.commit()

    for url in ("/api/v1/notes", "/api/v1/tags", "/api/v1/sharing/shared-with-me"):
        response = await client.get(url, headers=alice_headers)
        assert response.status_code == 401, url
        assert response.json()["error"] == "unauthenticated"
