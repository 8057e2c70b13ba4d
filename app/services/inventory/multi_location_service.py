# app/services/inventory/multi_location_service.py

from typing import Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.exceptions import NotFoundError
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.constants.adjustment_type import AdjustmentType
from app.models.catalog.location_models import Location
from app.schemas.inventory.adjustment_schemas import (
    MultiLocationAdjustmentCreate,
    MultiLocationAdjustmentResult,
    LocationAdjustmentResult,
    MultiLocationSummary,
)
from app.services.catalog.product_service import get_product_or_404
from app.services.inventory.stock_ledger_service import (
    lock_stock_row,
    set_stock_level,
    record_audit,
)
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def _load_active_locations(
    db: AsyncSession,
    location_ids: List[str],
) -> Dict[str, Location]:
    result = await db.execute(
        select(Location).where(
            Location.id.in_(location_ids),
            Location.is_active.is_(True),
        )
    )
    locations = {loc.id: loc for loc in result.scalars().all()}

    missing = [loc_id for loc_id in location_ids if loc_id not in locations]
    if missing:
        raise NotFoundError(
            f"Locations not found: {', '.join(missing)}",
            ErrorCode.LOCATION_NOT_FOUND,
            {"missingLocationIds": missing},
        )

    return locations


async def adjust_multi_location(
    db: AsyncSession,
    payload: MultiLocationAdjustmentCreate,
) -> MultiLocationAdjustmentResult:
    product = await get_product_or_404(db, payload.product_id)
    locations = await _load_active_locations(
        db, [item.location_id for item in payload.adjustments]
    )

    product_id = product.id
    results: List[LocationAdjustmentResult] = []

    try:
        # Lock in id order so overlapping batches cannot deadlock
        previous_levels: Dict[str, int] = {}
        for location_id in sorted(locations):
            row = await lock_stock_row(
                db,
                product_id=product.id,
                location_id=location_id,
            )
            previous_levels[location_id] = row.stock

        for item in payload.adjustments:
            location = locations[item.location_id]
            previous_stock = previous_levels[location.id]

            new_stock = await set_stock_level(
                db,
                product_id=product.id,
                location_id=location.id,
                new_stock=item.new_stock,
            )

            record_audit(
                db,
                product_id=product.id,
                location_id=location.id,
                adjustment_type=AdjustmentType(item.operation),
                quantity=abs(new_stock - previous_stock),
                previous_stock=previous_stock,
                new_stock=new_stock,
                reason=payload.reason,
                notes=payload.notes or f"Multi-location adjustment: {item.operation} operation",
                user_id=payload.performed_by,
            )

            results.append(
                LocationAdjustmentResult(
                    location_id=location.id,
                    location_name=location.name,
                    previous_stock=previous_stock,
                    new_stock=new_stock,
                    change=new_stock - previous_stock,
                    operation=item.operation,
                )
            )

        summary = MultiLocationSummary(
            locations_updated=len(results),
            total_previous_stock=sum(r.previous_stock for r in results),
            total_new_stock=sum(r.new_stock for r in results),
            total_change=sum(r.change for r in results),
        )

        await emit_activity(
            db,
            actor=payload.performed_by,
            code=ActivityCode.ADJUST_STOCK_MULTI_LOCATION,
            product_name=product.name,
            location_count=summary.locations_updated,
            total_previous_stock=summary.total_previous_stock,
            total_new_stock=summary.total_new_stock,
            reason=payload.reason,
        )

        await db.commit()

    except Exception:
        await db.rollback()
        logger.warning(
            "Multi-location adjustment rolled back",
            extra={"product_id": product_id, "applied_before_failure": len(results)},
        )
        raise

    logger.info(
        "Multi-location stock adjusted",
        extra={
            "product_id": product.id,
            "locations": summary.locations_updated,
            "total_change": summary.total_change,
            "actor": payload.performed_by,
        },
    )

    return MultiLocationAdjustmentResult(
        product_id=product.id,
        product_name=product.name,
        adjustments=results,
        summary=summary,
    )
