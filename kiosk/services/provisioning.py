"""
Account provisioning.

A new user never exists on its own: the user row, its profile and its trial
subscription are written in one transaction. If any of the three inserts
fails the whole registration is rolled back.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.config import settings
from kiosk.core.errors import ConstraintViolation, ProvisioningError, from_integrity_error
from kiosk.core.policy import Actor, Operation, authorize
from kiosk.core.security import hash_password
from kiosk.core.time_utils import days_from, utcnow
from kiosk.models import Profile, Subscription, SubscriptionStatus, User

logger = logging.getLogger(__name__)

SYSTEM = Actor.system()


async def provision_user(db: AsyncSession, email: str, password: str) -> User:
    """Create a user together with its profile and trial subscription."""
    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none():
        raise ConstraintViolation("uq_users_email", "Email already registered")

    now = utcnow()
    user = User(email=email, hashed_password=hash_password(password), created_at=now)
    try:
        db.add(user)
        await db.flush()  # get user.id

        profile = Profile(id=user.id, name=settings.DEFAULT_PROFILE_NAME, created_at=now)
        subscription = Subscription(
            user_id=user.id,
            status=SubscriptionStatus.TEST.value,
            expiration_date=days_from(now, settings.TRIAL_PERIOD_DAYS),
            plan=settings.DEFAULT_PLAN,
            created_at=now,
        )
        for row in (profile, subscription):
            await authorize(db, SYSTEM, Operation.INSERT, row)
            db.add(row)
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.error("Provisioning of %s rolled back: %s", email, exc.orig)
        raise from_integrity_error(exc) from exc
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Provisioning of %s rolled back: %s", email, exc)
        raise ProvisioningError() from exc

    logger.info("Provisioned user %s with trial until %s", user.id, subscription.expiration_date)
    return user
