"""Sale & SaleDetail models."""

import enum
import uuid
from decimal import Decimal

from sqlalchemy import String, Numeric, Integer, Boolean, ForeignKey, CheckConstraint, Index, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from kiosk.db.base import Base
from kiosk.models.mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class PaymentMethod(str, enum.Enum):
    CASH = "efectivo"
    MOBILE_PAYMENT = "pago_movil"
    ZELLE = "zelle"
    CREDIT_CARD = "credito"
    POINT_OF_SALE = "punto_de_venta"


_PAYMENT_VALUES = ", ".join(f"'{m.value}'" for m in PaymentMethod)


class Sale(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint(f"payment_method IN ({_PAYMENT_VALUES})", name="ck_sales_payment_method"),
        CheckConstraint("total_usd >= 0", name="ck_sales_total_usd_non_negative"),
        CheckConstraint("rate_bcv >= 0", name="ck_sales_rate_bcv_non_negative"),
        Index("ix_sales_user_created", "user_id", "created_at"),
    )

    total_usd: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    # Exchange rate snapshot at the time of sale, stored as given
    rate_bcv: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False)
    on_credit: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    client_name: Mapped[str | None] = mapped_column(String(255))

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    items = relationship(
        "SaleDetail",
        back_populates="sale",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Sale {self.id} total={self.total_usd}>"


class SaleDetail(UUIDPrimaryKeyMixin, Base):
    """Line item of a sale. Ownership comes from the parent sale."""

    __tablename__ = "sales_details"
    __table_args__ = (
        CheckConstraint("unit_price_usd >= 0", name="ck_sales_details_unit_price_non_negative"),
    )

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price_usd: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    sale_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="SET NULL"), index=True
    )

    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", back_populates="sale_details")

    def __repr__(self) -> str:
        return f"<SaleDetail product={self.product_id} qty={self.quantity}>"
