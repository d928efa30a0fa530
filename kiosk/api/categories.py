"""Category CRUD endpoints, scoped to the calling user."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.policy import Actor, Operation, authorize, get_visible, visible
from kiosk.db.base import get_db, commit
from kiosk.models.category import Category
from kiosk.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's categories."""
    query = visible(select(Category), actor, Category).order_by(Category.name)

    count_result = await db.execute(
        visible(select(func.count()).select_from(Category), actor, Category)
    )
    total = count_result.scalar_one()

    result = await db.execute(query)
    items = result.scalars().all()

    return CategoryListResponse(
        items=[CategoryResponse.model_validate(c) for c in items],
        total=total,
    )


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    category = await get_visible(db, actor, Category, category_id)
    return CategoryResponse.model_validate(category)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    category = Category(**body.model_dump(), user_id=actor.id)
    await authorize(db, actor, Operation.INSERT, category)

    db.add(category)
    await commit(db)
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    category = await get_visible(db, actor, Category, category_id)
    await authorize(db, actor, Operation.UPDATE, category)

    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(category, field, value)

    await commit(db)
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a category. Its products stay, uncategorized."""
    category = await get_visible(db, actor, Category, category_id)
    await authorize(db, actor, Operation.DELETE, category)

    await db.delete(category)
    await commit(db)
