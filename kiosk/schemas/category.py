"""Category schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict

from kiosk.core.config import settings

HEX_COLOR = r"^#[0-9a-fA-F]{6}$"


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    color: str = Field(default=settings.DEFAULT_CATEGORY_COLOR, pattern=HEX_COLOR)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    color: str | None = Field(None, pattern=HEX_COLOR)


class CategoryResponse(CategoryBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    created_at: datetime


class CategoryListResponse(BaseModel):
    items: list[CategoryResponse]
    total: int
