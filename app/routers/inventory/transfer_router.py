from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.inventory.transfer_schemas import StockTransferCreate, StockTransferResponse
from app.services.inventory.transfer_service import transfer_stock

router = APIRouter(prefix="/inventory", tags=["Stock Transfers"])


@router.post("/transfer", response_model=StockTransferResponse)
async def transfer_stock_api(
    payload: StockTransferCreate,
    db: AsyncSession = Depends(get_db),
):
    transfer = await transfer_stock(db, payload)
    return StockTransferResponse(
        message=f"Transferred {transfer.quantity} units ({transfer.transfer_code})",
        transfer=transfer,
    )
