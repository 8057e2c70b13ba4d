# app/services/inventory/adjustment_service.py

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InsufficientStockError
from app.constants.activity_codes import ActivityCode
from app.constants.adjustment_type import AdjustmentType
from app.schemas.inventory.adjustment_schemas import (
    StockAdjustmentCreate,
    StockAdjustmentResult,
    ProductLocationSnapshot,
)
from app.services.catalog.product_service import (
    get_product_or_404,
    get_location_or_404,
    allows_negative_stock,
)
from app.services.inventory.stock_ledger_service import (
    lock_stock_row,
    apply_stock_delta,
    current_stock,
    record_audit,
)
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def adjust_stock(
    db: AsyncSession,
    payload: StockAdjustmentCreate,
) -> StockAdjustmentResult:
    product = await get_product_or_404(db, payload.product_id)
    location = await get_location_or_404(db, payload.location_id)

    adjustment_type = AdjustmentType(payload.adjustment_type)
    delta = payload.quantity if adjustment_type == AdjustmentType.ADD else -payload.quantity
    product_id, location_id = product.id, location.id

    try:
        await lock_stock_row(
            db,
            product_id=product.id,
            location_id=location.id,
        )

        new_stock = await apply_stock_delta(
            db,
            product_id=product.id,
            location_id=location.id,
            delta=delta,
            allow_negative=allows_negative_stock(product),
        )

        if new_stock is None:
            available = await current_stock(
                db,
                product_id=product.id,
                location_id=location.id,
            )
            raise InsufficientStockError(available, payload.quantity)

        previous_stock = new_stock - delta

        record_audit(
            db,
            product_id=product.id,
            location_id=location.id,
            adjustment_type=adjustment_type,
            quantity=payload.quantity,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reason=payload.reason,
            notes=payload.notes,
            user_id=payload.performed_by,
        )

        await emit_activity(
            db,
            actor=payload.performed_by,
            code=ActivityCode.ADJUST_STOCK,
            adjustment_type=adjustment_type.value,
            quantity=payload.quantity,
            product_name=product.name,
            location_name=location.name,
            previous_stock=previous_stock,
            new_stock=new_stock,
            reason=payload.reason,
        )

        await db.commit()

    except InsufficientStockError as exc:
        await db.rollback()
        logger.info(
            "Stock removal rejected",
            extra={
                "product_id": product_id,
                "location_id": location_id,
                "current_stock": exc.current_stock,
                "requested": exc.requested_quantity,
            },
        )
        raise

    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Stock adjusted",
        extra={
            "product_id": product.id,
            "location_id": location.id,
            "type": adjustment_type.value,
            "previous": previous_stock,
            "new": new_stock,
            "actor": payload.performed_by,
        },
    )

    return StockAdjustmentResult(
        previous_stock=previous_stock,
        new_stock=new_stock,
        adjustment=delta,
        product_location=ProductLocationSnapshot(
            product_id=product.id,
            product_name=product.name,
            location_id=location.id,
            location_name=location.name,
            stock=new_stock,
        ),
    )
