"""
Row-level authorization.

Every read or write goes through this module before it touches storage:

    can(actor, Operation.UPDATE, product)          # pure predicate
    await authorize(db, actor, Operation.INSERT, sale)   # loads context, raises
    visible(select(Product), actor, Product)       # SELECT scoping as SQL

Policy table (actor = authenticated user, row = target row):

    profiles        select/update   actor.id == row.id
    categories      all             actor.id == row.user_id
    products        all             actor.id == row.user_id
    subscriptions   select          actor.id == row.user_id
    sales           select          actor.id == row.user_id
                    insert          owner check + subscription active/test and not expired
    sales_details   all             parent sale owned by actor

Anything not listed is denied. The system actor skips the table; it is used
by provisioning and subscription lifecycle management only.
"""

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, exists, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.errors import OperationDenied, RowNotFound, SubscriptionInactive
from kiosk.core.time_utils import as_utc, utcnow
from kiosk.models import Category, Product, Profile, Sale, SaleDetail, Subscription
from kiosk.models.subscription import SALE_ENABLED_STATUSES, SubscriptionStatus

logger = logging.getLogger(__name__)


class Operation(str, enum.Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Actor:
    id: UUID | None
    is_system: bool = False

    @classmethod
    def system(cls) -> "Actor":
        return cls(id=None, is_system=True)


@dataclass
class PolicyContext:
    actor: Actor
    now: datetime
    subscription: Subscription | None = None
    parent_sale: Sale | None = None


Predicate = Callable[[PolicyContext, Any], bool]


def _owned_by_actor(column: str) -> Predicate:
    def check(ctx: PolicyContext, row: Any) -> bool:
        return ctx.actor.id is not None and getattr(row, column) == ctx.actor.id

    return check


def _subscription_allows_sales(ctx: PolicyContext, row: Any) -> bool:
    sub = ctx.subscription
    if sub is None or sub.user_id != ctx.actor.id:
        return False
    try:
        status = SubscriptionStatus(sub.status)
    except ValueError:
        return False
    return status in SALE_ENABLED_STATUSES and as_utc(sub.expiration_date) > as_utc(ctx.now)


def _parent_sale_owned(ctx: PolicyContext, row: Any) -> bool:
    sale = ctx.parent_sale
    return (
        ctx.actor.id is not None
        and sale is not None
        and sale.id == row.sale_id
        and sale.user_id == ctx.actor.id
    )


def _all_operations(*predicates: Predicate) -> dict["Operation", tuple[Predicate, ...]]:
    return {op: predicates for op in Operation}


_owner = _owned_by_actor("user_id")

POLICIES: dict[type, dict[Operation, tuple[Predicate, ...]]] = {
    Profile: {
        Operation.SELECT: (_owned_by_actor("id"),),
        Operation.UPDATE: (_owned_by_actor("id"),),
    },
    Category: _all_operations(_owner),
    Product: _all_operations(_owner),
    Subscription: {
        Operation.SELECT: (_owner,),
    },
    Sale: {
        Operation.SELECT: (_owner,),
        Operation.INSERT: (_owner, _subscription_allows_sales),
    },
    SaleDetail: _all_operations(_parent_sale_owned),
}

# Column holding the owning user id, for tables that carry one
OWNER_COLUMNS: dict[type, str] = {
    Profile: "id",
    Category: "user_id",
    Product: "user_id",
    Subscription: "user_id",
    Sale: "user_id",
}


def can(
    actor: Actor,
    operation: Operation,
    row: Any,
    *,
    subscription: Subscription | None = None,
    parent_sale: Sale | None = None,
    now: datetime | None = None,
) -> bool:
    """Evaluate the policy for one actor, operation and row."""
    if actor.is_system:
        return True
    predicates = POLICIES.get(type(row), {}).get(operation)
    if not predicates:
        return False
    ctx = PolicyContext(
        actor=actor,
        now=now or utcnow(),
        subscription=subscription,
        parent_sale=parent_sale,
    )
    return all(predicate(ctx, row) for predicate in predicates)


def visibility_clause(actor: Actor, model: type):
    """SQL equivalent of the SELECT predicate for ``model``."""
    if actor.is_system:
        return true()
    if model is SaleDetail:
        return exists().where(Sale.id == SaleDetail.sale_id, Sale.user_id == actor.id)
    column = OWNER_COLUMNS.get(model)
    if column is None:
        raise ValueError(f"No row policy for {model.__name__}")
    return getattr(model, column) == actor.id


def visible(stmt: Select, actor: Actor, model: type) -> Select:
    """Restrict a SELECT to the rows of ``model`` the actor may read."""
    return stmt.where(visibility_clause(actor, model))


async def get_visible(db: AsyncSession, actor: Actor, model: type, row_id: UUID, *options) -> Any:
    """Fetch one row the actor may read; foreign and missing rows look the same."""
    stmt = visible(select(model).where(model.id == row_id), actor, model)
    if options:
        stmt = stmt.options(*options)
    row = (await db.execute(stmt)).scalar_one_or_none()
    if row is None:
        raise RowNotFound(f"{model.__name__} not found")
    return row


async def _load_context(db: AsyncSession, actor: Actor, operation: Operation, row: Any):
    subscription = parent_sale = None
    if isinstance(row, Sale) and operation is Operation.INSERT and actor.id is not None:
        # Read fresh on every insert, the gate must not trust a cached state
        subscription = (
            await db.execute(select(Subscription).where(Subscription.user_id == actor.id))
        ).scalar_one_or_none()
    if isinstance(row, SaleDetail) and row.sale_id is not None:
        parent_sale = await db.get(Sale, row.sale_id)
    return subscription, parent_sale


async def authorize(
    db: AsyncSession,
    actor: Actor,
    operation: Operation,
    row: Any,
    now: datetime | None = None,
) -> None:
    """
    Raise unless ``actor`` may perform ``operation`` on ``row``.

    Raises:
        SubscriptionInactive: sale insert by its owner without a usable subscription
        RowNotFound: the actor may not even read the row
        OperationDenied: the row is readable but the operation is not allowed
    """
    if actor.is_system:
        return
    now = now or utcnow()
    subscription, parent_sale = await _load_context(db, actor, operation, row)
    if can(actor, operation, row, subscription=subscription, parent_sale=parent_sale, now=now):
        return

    table = type(row).__name__
    if isinstance(row, Sale) and operation is Operation.INSERT and row.user_id == actor.id:
        logger.info("Sale insert blocked for user %s: subscription not active", actor.id)
        raise SubscriptionInactive()

    logger.warning("Denied %s on %s for user %s", operation.value, table, actor.id)
    readable = operation is not Operation.SELECT and can(
        actor, Operation.SELECT, row, parent_sale=parent_sale, now=now
    )
    if readable:
        raise OperationDenied(f"{operation.value} not allowed on {table}")
    raise RowNotFound(f"{table} not found")
