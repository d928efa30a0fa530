"""Subscription model - one per user, written only by the system path."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import String, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.db.base import Base
from kiosk.models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin, UTCDateTime


class SubscriptionStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    TEST = "test"


# Statuses under which the user may register sales (trial counts as active)
SALE_ENABLED_STATUSES = frozenset({SubscriptionStatus.ACTIVE, SubscriptionStatus.TEST})

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in SubscriptionStatus)


class Subscription(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("user_id", name="uq_subscriptions_user_id"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_subscriptions_status"),
    )

    status: Mapped[str] = mapped_column(
        String(20), default=SubscriptionStatus.TEST.value, server_default=SubscriptionStatus.TEST.value
    )
    expiration_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    plan: Mapped[str] = mapped_column(String(50), default="basic", server_default="basic")

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    user = relationship("User", back_populates="subscription")

    def __repr__(self) -> str:
        return f"<Subscription user={self.user_id} status={self.status} until={self.expiration_date}>"
