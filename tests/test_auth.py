"""Tests for auth: security utils, registration and login."""

import uuid
from datetime import timedelta

import pytest

from kiosk.core.security import hash_password, verify_password, create_access_token, decode_access_token


# ── Password hashing ──────────────────────────────

def test_hash_and_verify():
    plain = "SecurePass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed)
    assert not verify_password("wrong", hashed)


# ── JWT ────────────────────────────────────────────

def test_create_and_decode_token():
    uid = uuid.uuid4()
    token = create_access_token(user_id=uid)
    payload = decode_access_token(token)
    assert payload["sub"] == str(uid)


def test_expired_token():
    token = create_access_token(user_id=uuid.uuid4(), expires_delta=timedelta(seconds=-1))
    with pytest.raises(Exception):
        decode_access_token(token)


# ── Endpoints ──────────────────────────────────────

@pytest.mark.asyncio
async def test_register_then_login(client):
    resp = await client.post(
        "/auth/register", json={"email": "carla@example.com", "password": "SecurePass123!"}
    )
    assert resp.status_code == 201
    user_id = resp.json()["user_id"]

    resp = await client.post(
        "/auth/login", json={"email": "carla@example.com", "password": "SecurePass123!"}
    )
    assert resp.status_code == 200
    token = resp.json()["access_token"]

    resp = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json() == {"id": user_id, "email": "carla@example.com"}


@pytest.mark.asyncio
async def test_login_wrong_password(client, user_a):
    resp = await client.post(
        "/auth/login", json={"email": "alice@example.com", "password": "WrongPass123!"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_register_duplicate_email(client, user_a):
    resp = await client.post(
        "/auth/register", json={"email": "alice@example.com", "password": "SecurePass123!"}
    )
    assert resp.status_code == 409
    assert resp.json()["constraint"] == "uq_users_email"


@pytest.mark.asyncio
async def test_data_routes_require_token(client):
    resp = await client.get("/products")
    assert resp.status_code == 401

    resp = await client.get("/products", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401
