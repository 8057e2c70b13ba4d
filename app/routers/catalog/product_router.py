from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.catalog.product_schemas import StockPolicyUpdate, StockPolicyOut
from app.services.catalog.product_service import get_stock_policy, update_stock_policy
from app.utils.response import APIResponse, success_response

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("/{product_id}/stock-policy", response_model=APIResponse[StockPolicyOut])
async def get_stock_policy_api(
    product_id: str,
    db: AsyncSession = Depends(get_db),
):
    return success_response(
        "Stock policy fetched successfully",
        await get_stock_policy(db, product_id),
    )


@router.patch("/{product_id}/stock-policy", response_model=APIResponse[StockPolicyOut])
async def update_stock_policy_api(
    product_id: str,
    payload: StockPolicyUpdate,
    db: AsyncSession = Depends(get_db),
):
    return success_response(
        "Stock policy updated successfully",
        await update_stock_policy(db, product_id, payload),
    )
