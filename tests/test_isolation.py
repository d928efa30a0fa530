"""
Tenant isolation and account removal.

Two users with a full set of rows each: neither can see the other's data,
and removing one account removes exactly that account's rows.
"""

import uuid

import pytest
from sqlalchemy import func, select

from kiosk.models import Category, Product, Profile, Sale, SaleDetail, Subscription, User
from kiosk.services.subscriptions import delete_user


async def _populate(client, user):
    headers = user["headers"]
    category = (await client.post("/categories", json={"name": "General"}, headers=headers)).json()
    product = (
        await client.post(
            "/products",
            json={"name": "Queso", "bar_code": "123", "category_id": category["id"], "usd_price": "4.00"},
            headers=headers,
        )
    ).json()
    sale = (
        await client.post(
            "/sales",
            json={
                "rate_bcv": "36.50",
                "payment_method": "pago_movil",
                "items": [{"product_id": product["id"], "quantity": 1, "unit_price_usd": "4.00"}],
            },
            headers=headers,
        )
    ).json()
    return {"category": category, "product": product, "sale": sale}


@pytest.mark.asyncio
async def test_lists_never_include_other_users_rows(client, user_a, user_b):
    await _populate(client, user_a)
    await _populate(client, user_b)

    for path in ("/categories", "/products", "/sales"):
        resp = await client.get(path, headers=user_a["headers"])
        assert resp.json()["total"] == 1, path
        owners = {row["user_id"] for row in resp.json()["items"]}
        assert owners == {user_a["id"]}, path


@pytest.mark.asyncio
async def test_single_rows_of_other_users_are_not_found(client, user_a, user_b):
    rows_b = await _populate(client, user_b)
    headers = user_a["headers"]

    assert (await client.get(f"/categories/{rows_b['category']['id']}", headers=headers)).status_code == 404
    assert (await client.get(f"/products/{rows_b['product']['id']}", headers=headers)).status_code == 404
    assert (await client.get(f"/sales/{rows_b['sale']['id']}", headers=headers)).status_code == 404
    assert (await client.get(f"/sales/{rows_b['sale']['id']}/items", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_profile_and_subscription_are_per_user(client, user_a, user_b):
    resp = await client.patch("/profile", json={"phone": "0414-0000000"}, headers=user_a["headers"])
    assert resp.status_code == 200
    assert resp.json()["id"] == user_a["id"]

    resp = await client.get("/profile", headers=user_b["headers"])
    assert resp.json()["id"] == user_b["id"]
    assert resp.json()["phone"] is None

    resp = await client.get("/subscription", headers=user_b["headers"])
    assert resp.json()["user_id"] == user_b["id"]


@pytest.mark.asyncio
async def test_subscription_has_no_write_routes(client, user_a):
    for method in ("post", "put", "patch", "delete"):
        resp = await getattr(client, method)("/subscription", headers=user_a["headers"])
        assert resp.status_code == 405, method


@pytest.mark.asyncio
async def test_profile_cannot_be_deleted(client, user_a):
    resp = await client.delete("/profile", headers=user_a["headers"])
    assert resp.status_code == 405


@pytest.mark.asyncio
async def test_deleting_user_cascades(client, session_factory, user_a, user_b):
    await _populate(client, user_a)
    await _populate(client, user_b)
    a_id = uuid.UUID(user_a["id"])

    async with session_factory() as session:
        await delete_user(session, a_id)

    async with session_factory() as session:
        async def count(model, *where):
            stmt = select(func.count()).select_from(model)
            if where:
                stmt = stmt.where(*where)
            return (await session.execute(stmt)).scalar_one()

        assert await count(User, User.id == a_id) == 0
        assert await count(Profile, Profile.id == a_id) == 0
        assert await count(Subscription, Subscription.user_id == a_id) == 0
        assert await count(Category, Category.user_id == a_id) == 0
        assert await count(Product, Product.user_id == a_id) == 0
        assert await count(Sale, Sale.user_id == a_id) == 0
        # only bob's line item remains
        assert await count(SaleDetail) == 1
        assert await count(User) == 1


@pytest.mark.asyncio
async def test_token_of_deleted_account_is_rejected(client, session_factory, user_a):
    async with session_factory() as session:
        await delete_user(session, uuid.UUID(user_a["id"]))

    headers = user_a["headers"]
    resp = await client.post("/categories", json={"name": "General"}, headers=headers)
    assert resp.status_code == 401
    resp = await client.post("/sales", json={"rate_bcv": "36.50", "payment_method": "efectivo"}, headers=headers)
    assert resp.status_code == 401
    assert (await client.get("/subscription", headers=headers)).status_code == 401
