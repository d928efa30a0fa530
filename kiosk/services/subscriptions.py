"""
Subscription lifecycle - system path only.

Users can read their subscription through the API but never write it. The
functions here are what a billing or admin process calls; they run without
row-level checks.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.errors import RowNotFound
from kiosk.core.policy import Actor, Operation, authorize, can
from kiosk.core.time_utils import as_utc
from kiosk.db.base import commit
from kiosk.models import Sale, Subscription, SubscriptionStatus, User

logger = logging.getLogger(__name__)


async def get_subscription(db: AsyncSession, user_id: UUID) -> Subscription:
    result = await db.execute(select(Subscription).where(Subscription.user_id == user_id))
    subscription = result.scalar_one_or_none()
    if subscription is None:
        raise RowNotFound("Subscription not found")
    return subscription


def sales_allowed(subscription: Subscription, now: datetime | None = None) -> bool:
    """Evaluate the sale-insert policy for the subscription's owner."""
    owner = Actor(id=subscription.user_id)
    return can(owner, Operation.INSERT, Sale(user_id=subscription.user_id), subscription=subscription, now=now)


async def sale_gate_open(db: AsyncSession, user_id: UUID, now: datetime | None = None) -> bool:
    """True when the user may register sales right now."""
    result = await db.execute(select(Subscription).where(Subscription.user_id == user_id))
    subscription = result.scalar_one_or_none()
    return subscription is not None and sales_allowed(subscription, now)


async def set_subscription_state(
    db: AsyncSession,
    user_id: UUID,
    *,
    status: SubscriptionStatus | None = None,
    expiration_date: datetime | None = None,
    plan: str | None = None,
) -> Subscription:
    """Apply a status/expiration/plan transition decided by billing."""
    subscription = await get_subscription(db, user_id)
    await authorize(db, Actor.system(), Operation.UPDATE, subscription)
    if status is not None:
        subscription.status = SubscriptionStatus(status).value
    if expiration_date is not None:
        subscription.expiration_date = as_utc(expiration_date)
    if plan is not None:
        subscription.plan = plan
    await commit(db)
    logger.info(
        "Subscription of %s set to %s until %s (plan %s)",
        user_id, subscription.status, subscription.expiration_date, subscription.plan,
    )
    return subscription


async def delete_user(db: AsyncSession, user_id: UUID) -> None:
    """Remove an account; the database cascades to every row it owns."""
    result = await db.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        raise RowNotFound("User not found")
    await commit(db)
    logger.info("Deleted user %s", user_id)
