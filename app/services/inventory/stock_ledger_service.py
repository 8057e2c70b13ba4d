"""
Row-level stock primitives shared by every adjustment flow.

None of these commit. Callers own the transaction and must roll it back
on any exception so that a stock write and its audit record are either
both visible or both gone.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import raiseload

from app.core.exceptions import ConflictError
from app.constants.error_codes import ErrorCode
from app.constants.adjustment_type import AdjustmentType
from app.core.config import SYSTEM_ACTOR
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit


def _pair(product_id: str, location_id: str):
    return (
        ProductLocation.product_id == product_id,
        ProductLocation.location_id == location_id,
    )


async def lock_stock_row(
    db: AsyncSession,
    *,
    product_id: str,
    location_id: str,
) -> ProductLocation:
    """Lock the stock row for the pair, creating it with stock 0 if absent."""
    result = await db.execute(
        select(ProductLocation)
        .options(raiseload("*"))
        .where(*_pair(product_id, location_id))
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    row = result.scalar_one_or_none()

    if row:
        return row

    row = ProductLocation(
        product_id=product_id,
        location_id=location_id,
        stock=0,
        is_active=True,
    )
    db.add(row)

    try:
        await db.flush()
    except IntegrityError:
        # another transaction created the pair first
        raise ConflictError(
            "Concurrent inventory update detected",
            ErrorCode.CONCURRENT_STOCK_UPDATE,
            {"productId": product_id, "locationId": location_id},
        )

    return row


async def current_stock(
    db: AsyncSession,
    *,
    product_id: str,
    location_id: str,
) -> int:
    stock = await db.scalar(
        select(ProductLocation.stock).where(*_pair(product_id, location_id))
    )
    return stock or 0


async def apply_stock_delta(
    db: AsyncSession,
    *,
    product_id: str,
    location_id: str,
    delta: int,
    allow_negative: bool,
) -> int | None:
    """
    Atomically add ``delta`` to the stock row and return the new stock.

    Returns None when the row is missing or, for a negative delta with
    ``allow_negative`` off, when the result would drop below zero. The
    check and the write are one statement, so two concurrent removals
    cannot both pass against the same stale read.
    """
    stmt = update(ProductLocation).where(*_pair(product_id, location_id))

    if delta < 0 and not allow_negative:
        stmt = stmt.where(ProductLocation.stock + delta >= 0)

    stmt = (
        stmt.values(stock=ProductLocation.stock + delta)
        .returning(ProductLocation.stock)
        .execution_options(synchronize_session=False)
    )

    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def set_stock_level(
    db: AsyncSession,
    *,
    product_id: str,
    location_id: str,
    new_stock: int,
) -> int:
    result = await db.execute(
        update(ProductLocation)
        .where(*_pair(product_id, location_id))
        .values(stock=new_stock)
        .returning(ProductLocation.stock)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one()


def record_audit(
    db: AsyncSession,
    *,
    product_id: str,
    location_id: str,
    adjustment_type: AdjustmentType,
    quantity: int,
    previous_stock: int,
    new_stock: int,
    reason: str,
    notes: str | None = None,
    user_id: str = SYSTEM_ACTOR,
) -> InventoryAudit:
    audit = InventoryAudit(
        product_id=product_id,
        location_id=location_id,
        adjustment_type=AdjustmentType(adjustment_type).value,
        quantity=quantity,
        previous_stock=previous_stock,
        new_stock=new_stock,
        reason=reason,
        notes=notes,
        user_id=user_id,
    )
    db.add(audit)
    return audit
