from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.inventory.audit_schemas import InventoryAuditListData, StockLevelOut
from app.services.inventory.audit_service import list_audit_records, list_stock_levels
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/inventory", tags=["Inventory Audit"])


@router.get("/audit", response_model=APIResponse[InventoryAuditListData])
async def list_audit_records_api(
    product_id: Optional[str] = Query(None, alias="productId"),
    location_id: Optional[str] = Query(None, alias="locationId"),
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500, alias="pageSize"),
    db: AsyncSession = Depends(get_db),
):
    data = await list_audit_records(
        db,
        product_id=product_id,
        location_id=location_id,
        page=page,
        page_size=page_size,
    )
    return success_response("Inventory audit fetched successfully", data)


@router.get("/stock", response_model=APIResponse[List[StockLevelOut]])
async def list_stock_levels_api(
    product_id: Optional[str] = Query(None, alias="productId"),
    location_id: Optional[str] = Query(None, alias="locationId"),
    db: AsyncSession = Depends(get_db),
):
    data = await list_stock_levels(db, product_id=product_id, location_id=location_id)
    return success_response("Stock levels fetched successfully", data)
