"""Product model."""

import uuid
from decimal import Decimal

from sqlalchemy import String, Integer, Numeric, ForeignKey, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.db.base import Base
from kiosk.models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class Product(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        # NULL barcodes never collide
        UniqueConstraint("user_id", "bar_code", name="uq_products_user_bar_code"),
        CheckConstraint("usd_price >= 0", name="ck_products_usd_price_non_negative"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    bar_code: Mapped[str | None] = mapped_column(String(100))
    usd_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("0.00"), server_default="0.00", nullable=False
    )
    stock: Mapped[int] = mapped_column(Integer, default=0, server_default="0")
    min_stock: Mapped[int] = mapped_column(Integer, default=5, server_default="5")

    # Foreign keys
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("categories.id", ondelete="SET NULL")
    )

    # Relationships
    category = relationship("Category", back_populates="products")
    sale_details = relationship("SaleDetail", back_populates="product", passive_deletes=True)

    @property
    def is_low_stock(self) -> bool:
        return (self.stock or 0) <= (self.min_stock or 0)

    def __repr__(self) -> str:
        return f"<Product {self.bar_code}: {self.name}>"
