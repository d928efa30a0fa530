"""Profile model - one per user, keyed by the user id."""

import uuid

from sqlalchemy import String, Text, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.db.base import Base
from kiosk.models.mixins import CreatedAtMixin


class Profile(CreatedAtMixin, Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(Text)

    user = relationship("User", back_populates="profile")

    def __repr__(self) -> str:
        return f"<Profile {self.id}: {self.name}>"
