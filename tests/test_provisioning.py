"""Tests for account provisioning: user, profile and trial subscription together."""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from kiosk.core.config import settings
from kiosk.core.errors import KioskError
from kiosk.core.time_utils import as_utc, utcnow
from kiosk.models import Profile, Subscription, User
from kiosk.services import provisioning
from kiosk.services.provisioning import provision_user


@pytest.mark.asyncio
async def test_provision_creates_profile_and_trial(db):
    before = utcnow()
    user = await provision_user(db, "dora@example.com", "SecurePass123!")

    profiles = (await db.execute(select(Profile).where(Profile.id == user.id))).scalars().all()
    assert len(profiles) == 1
    assert profiles[0].name == settings.DEFAULT_PROFILE_NAME

    subs = (await db.execute(select(Subscription).where(Subscription.user_id == user.id))).scalars().all()
    assert len(subs) == 1
    sub = subs[0]
    assert sub.status == "test"
    assert sub.plan == "basic"
    expected = before + timedelta(days=45)
    assert abs(as_utc(sub.expiration_date) - expected) < timedelta(minutes=1)


@pytest.mark.asyncio
async def test_provision_is_atomic(db, monkeypatch):
    """A failing subscription insert must not leave a user or profile behind."""
    monkeypatch.setattr(provisioning, "days_from", lambda start, days: None)

    with pytest.raises(KioskError):
        await provision_user(db, "eve@example.com", "SecurePass123!")

    users = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    profiles = (await db.execute(select(func.count()).select_from(Profile))).scalar_one()
    subs = (await db.execute(select(func.count()).select_from(Subscription))).scalar_one()
    assert (users, profiles, subs) == (0, 0, 0)


@pytest.mark.asyncio
async def test_registration_endpoint_provisions(client, user_a):
    resp = await client.get("/profile", headers=user_a["headers"])
    assert resp.status_code == 200
    assert resp.json()["id"] == user_a["id"]

    resp = await client.get("/subscription", headers=user_a["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "test"
    assert body["user_id"] == user_a["id"]
    assert body["can_sell"] is True
