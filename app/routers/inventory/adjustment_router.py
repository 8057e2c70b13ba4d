from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.inventory.adjustment_schemas import (
    StockAdjustmentCreate,
    StockAdjustmentResponse,
    MultiLocationAdjustmentCreate,
    MultiLocationAdjustmentResponse,
    EndpointDescriptor,
)
from app.services.inventory.adjustment_service import adjust_stock
from app.services.inventory.multi_location_service import adjust_multi_location
from app.utils.logger import get_logger

router = APIRouter(prefix="/inventory", tags=["Stock Adjustments"])
logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.post("/adjust", response_model=StockAdjustmentResponse)
async def adjust_stock_api(
    payload: StockAdjustmentCreate,
    db: AsyncSession = Depends(get_db),
):
    result = await adjust_stock(db, payload)

    direction = "increased" if payload.adjustment_type == "add" else "decreased"
    return StockAdjustmentResponse(
        message=f"Stock {direction} successfully",
        **result.model_dump(),
    )


@router.get(
    "/adjust",
    response_model=EndpointDescriptor,
    response_model_exclude_none=True,
)
async def adjust_stock_descriptor():
    return EndpointDescriptor(
        message="Inventory adjustment API is working",
        timestamp=_now(),
        methods=["POST"],
        required_fields=["productId", "locationId", "quantity", "adjustmentType", "reason"],
    )


@router.post("/adjust-multi-location", response_model=MultiLocationAdjustmentResponse)
async def adjust_multi_location_api(
    payload: MultiLocationAdjustmentCreate,
    db: AsyncSession = Depends(get_db),
):
    result = await adjust_multi_location(db, payload)

    return MultiLocationAdjustmentResponse(
        message=(
            f"Stock adjusted successfully for {result.summary.locations_updated} location(s)"
        ),
        **result.model_dump(),
    )


@router.get(
    "/adjust-multi-location",
    response_model=EndpointDescriptor,
    response_model_exclude_none=True,
)
async def adjust_multi_location_descriptor():
    return EndpointDescriptor(
        message="Multi-location inventory adjustment API is working",
        timestamp=_now(),
        methods=["POST"],
        required_fields=["productId", "adjustments", "reason"],
        adjustment_fields=["locationId", "newStock", "operation"],
    )
