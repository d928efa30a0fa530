"""Category model."""

import uuid

from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.core.config import settings
from kiosk.db.base import Base
from kiosk.models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class Category(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "categories"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str] = mapped_column(
        String(20), default=settings.DEFAULT_CATEGORY_COLOR, server_default=settings.DEFAULT_CATEGORY_COLOR
    )

    # products.category_id is nulled by the database on delete
    products = relationship("Product", back_populates="category", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Category {self.name}>"
