"""Product schemas for API request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    bar_code: str | None = Field(None, min_length=1, max_length=100)
    usd_price: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=5, ge=0)
    category_id: UUID | None = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    bar_code: str | None = Field(None, min_length=1, max_length=100)
    usd_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    min_stock: int | None = Field(None, ge=0)
    category_id: UUID | None = None


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    is_low_stock: bool
    created_at: datetime


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int
