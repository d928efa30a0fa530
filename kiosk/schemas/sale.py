"""Sale schemas for API request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from kiosk.models.sale import PaymentMethod


class SaleDetailCreate(BaseModel):
    product_id: UUID | None = None
    quantity: int = Field(..., gt=0)
    unit_price_usd: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class SaleDetailUpdate(BaseModel):
    product_id: UUID | None = None
    quantity: int | None = Field(None, gt=0)
    unit_price_usd: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)


class SaleDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    sale_id: UUID
    product_id: UUID | None
    quantity: int
    unit_price_usd: Decimal


class SaleCreate(BaseModel):
    # Left out, the total is the sum of the line items
    total_usd: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    rate_bcv: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    payment_method: PaymentMethod
    on_credit: bool = False
    client_name: str | None = Field(None, max_length=255)
    items: list[SaleDetailCreate] = Field(default_factory=list)


class SaleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    total_usd: Decimal
    rate_bcv: Decimal
    payment_method: PaymentMethod
    on_credit: bool
    client_name: str | None
    created_at: datetime
    items: list[SaleDetailResponse]


class SaleListResponse(BaseModel):
    items: list[SaleResponse]
    total: int
    page: int
    size: int
