"""Read-only view of the caller's subscription."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.errors import RowNotFound
from kiosk.core.policy import Actor, visible
from kiosk.db.base import get_db
from kiosk.models.subscription import Subscription
from kiosk.schemas.subscription import SubscriptionResponse
from kiosk.services.subscriptions import sales_allowed

router = APIRouter(prefix="/subscription", tags=["subscription"])


@router.get("", response_model=SubscriptionResponse)
async def get_my_subscription(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Current status, plan and expiration. There is no write endpoint."""
    result = await db.execute(visible(select(Subscription), actor, Subscription))
    subscription = result.scalar_one_or_none()
    if subscription is None:
        raise RowNotFound("Subscription not found")

    response = SubscriptionResponse.model_validate(subscription)
    response.can_sell = sales_allowed(subscription)
    return response
