"""Product CRUD endpoints, scoped to the calling user."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.errors import ConstraintViolation, RowNotFound
from kiosk.core.policy import Actor, Operation, authorize, get_visible, visible
from kiosk.db.base import get_db, commit
from kiosk.models.category import Category
from kiosk.models.product import Product
from kiosk.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)

router = APIRouter(prefix="/products", tags=["products"])

# Fields a PATCH may explicitly clear
NULLABLE_FIELDS = {"bar_code", "category_id"}


def _escape_like(s: str) -> str:
    """Escape SQL LIKE wildcards in user input."""
    return s.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def _ensure_barcode_free(
    db: AsyncSession, actor: Actor, bar_code: str, exclude_id: UUID | None = None
) -> None:
    query = visible(select(Product.id).where(Product.bar_code == bar_code), actor, Product)
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ConstraintViolation("uq_products_user_bar_code", f"Barcode '{bar_code}' already exists")


async def _ensure_category_visible(db: AsyncSession, actor: Actor, category_id: UUID) -> None:
    await get_visible(db, actor, Category, category_id)


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    category_id: UUID | None = None,
    search: str | None = None,
    low_stock: bool = False,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    query = visible(select(Product), actor, Product)

    if category_id:
        query = query.where(Product.category_id == category_id)
    if search:
        like = f"%{_escape_like(search)}%"
        query = query.where(Product.name.ilike(like, escape="\\") | Product.bar_code.ilike(like, escape="\\"))
    if low_stock:
        query = query.where(Product.stock <= Product.min_stock)

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()
    offset = (page - 1) * page_size
    query = query.offset(offset).limit(page_size).order_by(Product.name)

    result = await db.execute(query)
    items = result.scalars().all()

    return ProductListResponse(
        items=[ProductResponse.model_validate(p) for p in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/barcode/{bar_code}", response_model=ProductResponse)
async def get_product_by_barcode(
    bar_code: str,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        visible(select(Product).where(Product.bar_code == bar_code), actor, Product)
    )
    product = result.scalar_one_or_none()
    if not product:
        raise RowNotFound("Product not found")
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    product = await get_visible(db, actor, Product, product_id)
    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    if body.bar_code:
        await _ensure_barcode_free(db, actor, body.bar_code)
    if body.category_id:
        await _ensure_category_visible(db, actor, body.category_id)

    product = Product(**body.model_dump(), user_id=actor.id)
    await authorize(db, actor, Operation.INSERT, product)

    db.add(product)
    await commit(db)
    return ProductResponse.model_validate(product)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    product = await get_visible(db, actor, Product, product_id)
    await authorize(db, actor, Operation.UPDATE, product)

    update_data = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }

    if update_data.get("bar_code") and update_data["bar_code"] != product.bar_code:
        await _ensure_barcode_free(db, actor, update_data["bar_code"], exclude_id=product.id)
    if update_data.get("category_id") and update_data["category_id"] != product.category_id:
        await _ensure_category_visible(db, actor, update_data["category_id"])

    for key, value in update_data.items():
        setattr(product, key, value)

    await commit(db)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """Delete a product. Sale line items keep their snapshot with no product."""
    product = await get_visible(db, actor, Product, product_id)
    await authorize(db, actor, Operation.DELETE, product)

    await db.delete(product)
    await commit(db)
