"""Subscription schemas (read only for users)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from kiosk.models.subscription import SubscriptionStatus


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    status: SubscriptionStatus
    expiration_date: datetime
    plan: str
    created_at: datetime
    can_sell: bool = False
