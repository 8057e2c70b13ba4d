# app/services/inventory/bulk_stock_service.py

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, insert, exists, func, case

from app.core.config import BULK_OPERATION_TIMEOUT_SECONDS, LOW_STOCK_THRESHOLD
from app.core.exceptions import AppException, ConsistencyError
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.constants.adjustment_type import AdjustmentType
from app.models.base.mixins import new_id
from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit
from app.schemas.inventory.bulk_stock_schemas import (
    BulkAddStockRequest,
    BulkAddStockResult,
    BulkStockUpdate,
    LocationRef,
    LocationStockSummary,
    StockSummaryResponse,
)
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)

BULK_REASON = "Bulk stock addition to all locations"


# =====================================================
# SELECTION
# =====================================================
async def get_qualifying_locations(db: AsyncSession) -> List[Location]:
    """Active locations that already stock at least one product."""
    has_stock_row = exists().where(ProductLocation.location_id == Location.id)

    result = await db.execute(
        select(Location)
        .where(Location.is_active.is_(True), has_stock_row)
        .order_by(Location.name, Location.id)
    )
    return list(result.scalars().all())


async def _get_active_products(db: AsyncSession) -> List[Product]:
    result = await db.execute(
        select(Product)
        .where(Product.is_active.is_(True))
        .order_by(Product.name, Product.id)
    )
    return list(result.scalars().all())


async def verify_locations_active(
    db: AsyncSession,
    location_ids: List[str],
) -> Dict[str, Location]:
    """
    Re-read and lock the given locations inside the current transaction.

    Raises ConsistencyError naming every id that no longer resolves to an
    active location.
    """
    result = await db.execute(
        select(Location)
        .where(Location.id.in_(location_ids), Location.is_active.is_(True))
        .order_by(Location.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    locations = {loc.id: loc for loc in result.scalars().all()}

    changed = [loc_id for loc_id in location_ids if loc_id not in locations]
    if changed:
        raise ConsistencyError(
            f"Locations changed state during bulk operation: {', '.join(changed)}",
            {"locationIds": changed},
        )

    return locations


# =====================================================
# WRITE
# =====================================================
async def _apply_bulk_addition(
    db: AsyncSession,
    *,
    stock_to_add: int,
    actor: str,
    location_ids: List[str],
    products: List[Product],
) -> BulkAddStockResult:
    # Stages writes only; bulk_add_stock commits
    locations = await verify_locations_active(db, location_ids)
    ordered_locations = [locations[loc_id] for loc_id in location_ids]
    product_ids = [p.id for p in products]

    # One read for every existing pair
    result = await db.execute(
        select(
            ProductLocation.product_id,
            ProductLocation.location_id,
            ProductLocation.stock,
        )
        .where(
            ProductLocation.product_id.in_(product_ids),
            ProductLocation.location_id.in_(location_ids),
        )
        # Fixed lock order, same as single-row adjustments and transfers
        .order_by(ProductLocation.product_id, ProductLocation.location_id)
        .with_for_update()
    )
    existing: Dict[Tuple[str, str], int] = {
        (row.product_id, row.location_id): row.stock for row in result.all()
    }

    updates: List[BulkStockUpdate] = []
    new_rows = []
    audit_rows = []

    for product in products:
        for location in ordered_locations:
            previous_stock = existing.get((product.id, location.id), 0)
            new_stock = previous_stock + stock_to_add

            if (product.id, location.id) not in existing:
                new_rows.append({
                    "id": new_id(),
                    "product_id": product.id,
                    "location_id": location.id,
                    "stock": new_stock,
                    "is_active": True,
                })

            audit_rows.append({
                "product_id": product.id,
                "location_id": location.id,
                "adjustment_type": AdjustmentType.ADD.value,
                "quantity": stock_to_add,
                "previous_stock": previous_stock,
                "new_stock": new_stock,
                "reason": BULK_REASON,
                "notes": f"Added {stock_to_add} units via bulk operation",
                "user_id": actor,
            })

            updates.append(
                BulkStockUpdate(
                    product_id=product.id,
                    product_name=product.name,
                    location_id=location.id,
                    location_name=location.name,
                    previous_stock=previous_stock,
                    new_stock=new_stock,
                    stock_added=stock_to_add,
                )
            )

    if existing:
        await db.execute(
            update(ProductLocation)
            .where(
                ProductLocation.product_id.in_(product_ids),
                ProductLocation.location_id.in_(location_ids),
            )
            .values(stock=ProductLocation.stock + stock_to_add)
            .execution_options(synchronize_session=False)
        )

    if new_rows:
        await db.execute(insert(ProductLocation), new_rows)

    if audit_rows:
        await db.execute(insert(InventoryAudit), audit_rows)

    await emit_activity(
        db,
        actor=actor,
        code=ActivityCode.BULK_ADD_STOCK,
        stock_to_add=stock_to_add,
        products_updated=len(products),
        locations_updated=len(ordered_locations),
        total_updates=len(updates),
    )

    return BulkAddStockResult(
        products_updated=len(products),
        locations_updated=len(ordered_locations),
        total_updates=len(updates),
        stock_added_per_location=stock_to_add,
        updates=updates,
        locations=[LocationRef(id=loc.id, name=loc.name) for loc in ordered_locations],
    )


async def bulk_add_stock(
    db: AsyncSession,
    payload: BulkAddStockRequest,
) -> BulkAddStockResult:
    locations = await get_qualifying_locations(db)
    products = await _get_active_products(db)
    location_ids = [loc.id for loc in locations]

    if not location_ids or not products:
        logger.info(
            "Bulk stock addition skipped",
            extra={"locations": len(location_ids), "products": len(products)},
        )
        return BulkAddStockResult(
            products_updated=0,
            locations_updated=0,
            total_updates=0,
            stock_added_per_location=payload.stock_to_add,
            updates=[],
            locations=[],
        )

    try:
        result = await asyncio.wait_for(
            _apply_bulk_addition(
                db,
                stock_to_add=payload.stock_to_add,
                actor=payload.performed_by,
                location_ids=location_ids,
                products=products,
            ),
            timeout=BULK_OPERATION_TIMEOUT_SECONDS,
        )
        # The commit itself is not bounded by the timeout
        await db.commit()

    except asyncio.TimeoutError:
        await db.rollback()
        logger.error(
            "Bulk stock addition timed out",
            extra={
                "timeout_seconds": BULK_OPERATION_TIMEOUT_SECONDS,
                "pairs": len(location_ids) * len(products),
            },
        )
        raise AppException(
            504,
            "Bulk stock operation timed out",
            ErrorCode.BULK_OPERATION_TIMEOUT,
            {"timeoutSeconds": BULK_OPERATION_TIMEOUT_SECONDS},
        )

    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Bulk stock added",
        extra={
            "stock_to_add": payload.stock_to_add,
            "products": result.products_updated,
            "locations": result.locations_updated,
            "actor": payload.performed_by,
        },
    )

    return result


# =====================================================
# SUMMARY (GET)
# =====================================================
async def get_stock_summary(db: AsyncSession) -> StockSummaryResponse:
    locations = await get_qualifying_locations(db)

    result = await db.execute(
        select(
            ProductLocation.location_id,
            func.count(ProductLocation.id).label("total_products"),
            func.coalesce(func.sum(ProductLocation.stock), 0).label("total_stock"),
            func.sum(case((Product.is_retail.is_(True), 1), else_=0)).label("retail"),
            func.sum(case((Product.is_retail.is_(False), 1), else_=0)).label("professional"),
            func.sum(case((ProductLocation.stock <= 0, 1), else_=0)).label("out_of_stock"),
            func.sum(
                case((ProductLocation.stock.between(1, LOW_STOCK_THRESHOLD), 1), else_=0)
            ).label("low_stock"),
        )
        .join(Product, Product.id == ProductLocation.product_id)
        .where(Product.is_active.is_(True))
        .group_by(ProductLocation.location_id)
    )
    totals = {row.location_id: row for row in result.all()}

    summary = []
    for location in locations:
        row = totals.get(location.id)
        summary.append(
            LocationStockSummary(
                location_id=location.id,
                location_name=location.name,
                total_products=row.total_products if row else 0,
                total_stock=row.total_stock if row else 0,
                retail_products=row.retail if row else 0,
                professional_products=row.professional if row else 0,
                low_stock_products=row.low_stock if row else 0,
                out_of_stock_products=row.out_of_stock if row else 0,
            )
        )

    return StockSummaryResponse(
        summary=summary,
        total_locations=len(summary),
        low_stock_threshold=LOW_STOCK_THRESHOLD,
        last_updated=datetime.now(timezone.utc).isoformat(),
    )
