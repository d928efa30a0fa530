"""
Sale endpoints.

Sales are insert-only for users: there is no update or delete route. Creating
a sale is gated on the caller's subscription (active or trial, not expired).
Line items carry no owner of their own and are reached through their sale.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.errors import RowNotFound
from kiosk.core.policy import Actor, Operation, authorize, get_visible, visible
from kiosk.core.time_utils import as_utc
from kiosk.db.base import get_db, commit
from kiosk.models.product import Product
from kiosk.models.sale import Sale, SaleDetail
from kiosk.schemas.sale import (
    SaleCreate,
    SaleResponse,
    SaleListResponse,
    SaleDetailCreate,
    SaleDetailUpdate,
    SaleDetailResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sales", tags=["sales"])

CENT = Decimal("0.01")


def compute_total(items: list[SaleDetailCreate]) -> Decimal:
    """Sum of quantity * unit price, rounded to cents."""
    total = sum((item.unit_price_usd * item.quantity for item in items), Decimal("0"))
    return total.quantize(CENT)


async def _ensure_product_visible(db: AsyncSession, actor: Actor, product_id: UUID | None) -> None:
    if product_id is not None:
        await get_visible(db, actor, Product, product_id)


@router.get("", response_model=SaleListResponse)
async def list_sales(
    page: int = Query(1, ge=1),
    size: int = Query(50, ge=1, le=100),
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """List the caller's sales, newest first."""
    query = visible(select(Sale), actor, Sale)
    if from_date:
        query = query.where(Sale.created_at >= as_utc(from_date))
    if to_date:
        query = query.where(Sale.created_at <= as_utc(to_date))

    total = (await db.execute(select(func.count()).select_from(query.subquery()))).scalar_one()

    offset = (page - 1) * size
    result = await db.execute(query.order_by(Sale.created_at.desc()).offset(offset).limit(size))
    sales = result.scalars().all()

    return SaleListResponse(
        items=[SaleResponse.model_validate(s) for s in sales],
        total=total,
        page=page,
        size=size,
    )


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    sale = await get_visible(db, actor, Sale, sale_id)
    return SaleResponse.model_validate(sale)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    body: SaleCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Register a sale and its line items in one transaction.

    Responds 402 when the subscription does not allow selling.
    """
    sale = Sale(
        user_id=actor.id,
        total_usd=body.total_usd if body.total_usd is not None else compute_total(body.items),
        rate_bcv=body.rate_bcv,
        payment_method=body.payment_method.value,
        on_credit=body.on_credit,
        client_name=body.client_name,
        items=[],
    )
    await authorize(db, actor, Operation.INSERT, sale)

    for item in body.items:
        await _ensure_product_visible(db, actor, item.product_id)

    db.add(sale)
    await db.flush()  # get sale.id

    for item in body.items:
        detail = SaleDetail(sale_id=sale.id, **item.model_dump())
        await authorize(db, actor, Operation.INSERT, detail)
        sale.items.append(detail)

    await commit(db)
    logger.info("Sale %s registered by %s: %s USD", sale.id, actor.id, sale.total_usd)
    return SaleResponse.model_validate(sale)


# ── Line items ─────────────────────────────────────

async def _get_item(db: AsyncSession, actor: Actor, sale_id: UUID, item_id: UUID) -> SaleDetail:
    item = await get_visible(db, actor, SaleDetail, item_id)
    if item.sale_id != sale_id:
        raise RowNotFound("SaleDetail not found")
    return item


@router.get("/{sale_id}/items", response_model=list[SaleDetailResponse])
async def list_sale_items(
    sale_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    await get_visible(db, actor, Sale, sale_id)
    result = await db.execute(
        visible(select(SaleDetail).where(SaleDetail.sale_id == sale_id), actor, SaleDetail)
    )
    return [SaleDetailResponse.model_validate(d) for d in result.scalars().all()]


@router.post(
    "/{sale_id}/items",
    response_model=SaleDetailResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_sale_item(
    sale_id: UUID,
    body: SaleDetailCreate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    detail = SaleDetail(sale_id=sale_id, **body.model_dump())
    await authorize(db, actor, Operation.INSERT, detail)
    await _ensure_product_visible(db, actor, body.product_id)

    db.add(detail)
    await commit(db)
    return SaleDetailResponse.model_validate(detail)


@router.patch("/{sale_id}/items/{item_id}", response_model=SaleDetailResponse)
async def update_sale_item(
    sale_id: UUID,
    item_id: UUID,
    body: SaleDetailUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    detail = await _get_item(db, actor, sale_id, item_id)
    await authorize(db, actor, Operation.UPDATE, detail)

    update_data = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if value is not None or field == "product_id"
    }
    if update_data.get("product_id"):
        await _ensure_product_visible(db, actor, update_data["product_id"])

    for field, value in update_data.items():
        setattr(detail, field, value)

    await commit(db)
    return SaleDetailResponse.model_validate(detail)


@router.delete("/{sale_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sale_item(
    sale_id: UUID,
    item_id: UUID,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    detail = await _get_item(db, actor, sale_id, item_id)
    await authorize(db, actor, Operation.DELETE, detail)

    await db.delete(detail)
    await commit(db)
