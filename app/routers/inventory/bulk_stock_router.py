from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.inventory.bulk_stock_schemas import (
    BulkAddStockRequest,
    BulkAddStockResponse,
    StockSummaryResponse,
)
from app.services.inventory.bulk_stock_service import bulk_add_stock, get_stock_summary

router = APIRouter(prefix="/inventory", tags=["Bulk Stock"])


@router.post("/add-stock-all-locations", response_model=BulkAddStockResponse)
async def bulk_add_stock_api(
    payload: Optional[BulkAddStockRequest] = None,
    db: AsyncSession = Depends(get_db),
):
    # Empty body means "use the default quantity"
    payload = payload or BulkAddStockRequest()
    result = await bulk_add_stock(db, payload)

    return BulkAddStockResponse(
        message=(
            f"Successfully added {result.stock_added_per_location} stock to "
            f"{result.locations_updated} locations for {result.products_updated} products"
        ),
        result=result,
    )


@router.get("/add-stock-all-locations", response_model=StockSummaryResponse)
async def stock_summary_api(db: AsyncSession = Depends(get_db)):
    return await get_stock_summary(db)
