# app/services/inventory/transfer_service.py

import secrets
import time

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError, InsufficientStockError
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.constants.adjustment_type import AdjustmentType
from app.models.inventory.stock_transfer_models import StockTransfer
from app.schemas.inventory.transfer_schemas import StockTransferCreate, StockTransferOut
from app.services.catalog.product_service import get_product_or_404, get_location_or_404
from app.services.inventory.stock_ledger_service import (
    lock_stock_row,
    apply_stock_delta,
    current_stock,
    record_audit,
)
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TRANSFER_REASON = "Stock transfer"


def generate_transfer_code() -> str:
    return f"TXF-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


async def transfer_stock(
    db: AsyncSession,
    payload: StockTransferCreate,
) -> StockTransferOut:
    if payload.from_location_id == payload.to_location_id:
        raise ValidationError(
            "Source and destination locations must differ",
            {"locationId": payload.from_location_id},
            ErrorCode.STOCK_TRANSFER_INVALID_LOCATION,
        )

    product = await get_product_or_404(db, payload.product_id)
    if not product.is_active:
        raise ValidationError(
            "Product is inactive",
            {"productId": product.id},
            ErrorCode.PRODUCT_INACTIVE,
        )

    source = await get_location_or_404(db, payload.from_location_id)
    destination = await get_location_or_404(db, payload.to_location_id)

    inactive = [loc.id for loc in (source, destination) if not loc.is_active]
    if inactive:
        raise ValidationError(
            f"Locations are inactive: {', '.join(inactive)}",
            {"locationIds": inactive},
            ErrorCode.LOCATION_INACTIVE,
        )

    reason = payload.reason or DEFAULT_TRANSFER_REASON
    deltas = {
        source.id: -payload.quantity,
        destination.id: payload.quantity,
    }
    stock_after = {}
    product_id = product.id

    try:
        # Fixed lock order so opposite transfers cannot deadlock
        for location_id in sorted(deltas):
            await lock_stock_row(db, product_id=product.id, location_id=location_id)

        for location_id in sorted(deltas):
            new_stock = await apply_stock_delta(
                db,
                product_id=product.id,
                location_id=location_id,
                delta=deltas[location_id],
                allow_negative=False,
            )
            if new_stock is None:
                available = await current_stock(
                    db, product_id=product.id, location_id=location_id
                )
                raise InsufficientStockError(available, payload.quantity)
            stock_after[location_id] = new_stock

        transfer = StockTransfer(
            transfer_code=generate_transfer_code(),
            product_id=product.id,
            from_location_id=source.id,
            to_location_id=destination.id,
            quantity=payload.quantity,
            reason=reason,
            notes=payload.notes,
            created_by=payload.performed_by,
        )
        db.add(transfer)

        notes = payload.notes or f"Transfer {transfer.transfer_code}"
        for location_id, adjustment_type in (
            (source.id, AdjustmentType.REMOVE),
            (destination.id, AdjustmentType.ADD),
        ):
            record_audit(
                db,
                product_id=product.id,
                location_id=location_id,
                adjustment_type=adjustment_type,
                quantity=payload.quantity,
                previous_stock=stock_after[location_id] - deltas[location_id],
                new_stock=stock_after[location_id],
                reason=reason,
                notes=notes,
                user_id=payload.performed_by,
            )

        await emit_activity(
            db,
            actor=payload.performed_by,
            code=ActivityCode.TRANSFER_STOCK,
            quantity=payload.quantity,
            product_name=product.name,
            from_location_name=source.name,
            to_location_name=destination.name,
            transfer_code=transfer.transfer_code,
        )

        await db.commit()
        await db.refresh(transfer)

    except Exception:
        await db.rollback()
        logger.info("Stock transfer rolled back", extra={"product_id": product_id})
        raise

    logger.info(
        "Stock transferred",
        extra={
            "transfer_code": transfer.transfer_code,
            "product_id": product.id,
            "from": source.id,
            "to": destination.id,
            "quantity": payload.quantity,
        },
    )

    return StockTransferOut(
        id=transfer.id,
        transfer_code=transfer.transfer_code,
        product_id=product.id,
        product_name=product.name,
        from_location_id=source.id,
        from_location_name=source.name,
        to_location_id=destination.id,
        to_location_name=destination.name,
        quantity=transfer.quantity,
        status=transfer.status,
        reason=transfer.reason,
        notes=transfer.notes,
        created_by=transfer.created_by,
        source_stock=stock_after[source.id],
        destination_stock=stock_after[destination.id],
        created_at=transfer.created_at,
    )
