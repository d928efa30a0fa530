"""Unit tests for the row-level authorization predicates."""

import uuid
from datetime import timedelta
from decimal import Decimal

import pytest

from kiosk.core.policy import Actor, Operation, can
from kiosk.core.time_utils import utcnow
from kiosk.models import (
    Category, Product, Profile, Sale, SaleDetail, Subscription, SubscriptionStatus,
)


@pytest.fixture
def alice():
    return Actor(id=uuid.uuid4())


@pytest.fixture
def bob():
    return Actor(id=uuid.uuid4())


def _subscription(actor, status=SubscriptionStatus.TEST, days=10):
    return Subscription(
        user_id=actor.id,
        status=status.value,
        expiration_date=utcnow() + timedelta(days=days),
    )


def _sale(actor):
    return Sale(
        id=uuid.uuid4(),
        user_id=actor.id,
        total_usd=Decimal("10.00"),
        rate_bcv=Decimal("36.50"),
        payment_method="efectivo",
    )


# ── Owned tables ───────────────────────────────────

@pytest.mark.parametrize("model", [Category, Product])
@pytest.mark.parametrize("operation", list(Operation))
def test_owner_has_full_access(model, operation, alice, bob):
    row = model(user_id=alice.id, name="x")
    assert can(alice, operation, row)
    assert not can(bob, operation, row)


def test_profile_select_and_update_only(alice, bob):
    profile = Profile(id=alice.id, name="Mi Kiosco Nuevo")
    assert can(alice, Operation.SELECT, profile)
    assert can(alice, Operation.UPDATE, profile)
    assert not can(alice, Operation.INSERT, profile)
    assert not can(alice, Operation.DELETE, profile)
    assert not can(bob, Operation.SELECT, profile)
    assert not can(bob, Operation.UPDATE, profile)


def test_subscription_is_read_only_for_users(alice, bob):
    subscription = _subscription(alice)
    assert can(alice, Operation.SELECT, subscription)
    for operation in (Operation.INSERT, Operation.UPDATE, Operation.DELETE):
        assert not can(alice, operation, subscription)
    assert not can(bob, Operation.SELECT, subscription)


def test_system_actor_bypasses_policies(alice):
    system = Actor.system()
    assert can(system, Operation.UPDATE, _subscription(alice))
    assert can(system, Operation.INSERT, Profile(id=alice.id))


def test_unknown_row_type_denied(alice):
    assert not can(alice, Operation.SELECT, object())


# ── Sale insert gate ───────────────────────────────

@pytest.mark.parametrize(
    "status,days,allowed",
    [
        (SubscriptionStatus.TEST, 10, True),
        (SubscriptionStatus.ACTIVE, 1, True),
        (SubscriptionStatus.EXPIRED, 10, False),
        (SubscriptionStatus.ACTIVE, -1, False),
        (SubscriptionStatus.TEST, -1, False),
    ],
)
def test_sale_insert_requires_usable_subscription(alice, status, days, allowed):
    sale = _sale(alice)
    subscription = _subscription(alice, status=status, days=days)
    assert can(alice, Operation.INSERT, sale, subscription=subscription) is allowed


def test_sale_insert_denied_at_exact_expiration(alice):
    now = utcnow()
    subscription = Subscription(user_id=alice.id, status="active", expiration_date=now)
    assert not can(alice, Operation.INSERT, _sale(alice), subscription=subscription, now=now)
    assert can(
        alice, Operation.INSERT, _sale(alice),
        subscription=subscription, now=now - timedelta(seconds=1),
    )


def test_sale_insert_without_subscription_denied(alice):
    assert not can(alice, Operation.INSERT, _sale(alice))


def test_sale_insert_with_someone_elses_subscription_denied(alice, bob):
    assert not can(alice, Operation.INSERT, _sale(alice), subscription=_subscription(bob))


def test_sale_insert_for_other_owner_denied(alice, bob):
    assert not can(alice, Operation.INSERT, _sale(bob), subscription=_subscription(alice))


def test_naive_expiration_treated_as_utc(alice):
    """SQLite hands back naive datetimes; they must compare as UTC."""
    expiration = (utcnow() + timedelta(days=2)).replace(tzinfo=None)
    subscription = Subscription(user_id=alice.id, status="test", expiration_date=expiration)
    assert can(alice, Operation.INSERT, _sale(alice), subscription=subscription)


@pytest.mark.parametrize("operation", [Operation.UPDATE, Operation.DELETE])
def test_sales_cannot_be_changed_by_users(alice, operation):
    assert not can(alice, operation, _sale(alice))


# ── Line items ─────────────────────────────────────

@pytest.mark.parametrize("operation", list(Operation))
def test_sale_detail_access_derived_from_parent_sale(alice, bob, operation):
    sale = _sale(alice)
    detail = SaleDetail(sale_id=sale.id, quantity=1, unit_price_usd=Decimal("1.00"))
    assert can(alice, operation, detail, parent_sale=sale)
    assert not can(bob, operation, detail, parent_sale=sale)


def test_sale_detail_without_parent_denied(alice):
    detail = SaleDetail(sale_id=uuid.uuid4(), quantity=1, unit_price_usd=Decimal("1.00"))
    assert not can(alice, Operation.SELECT, detail)


def test_sale_detail_parent_must_match(alice):
    sale = _sale(alice)
    detail = SaleDetail(sale_id=uuid.uuid4(), quantity=1, unit_price_usd=Decimal("1.00"))
    assert not can(alice, Operation.SELECT, detail, parent_sale=sale)
