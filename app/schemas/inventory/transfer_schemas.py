from typing import Optional
from datetime import datetime

from pydantic import Field

from app.core.config import SYSTEM_ACTOR
from app.schemas.base import CamelModel, NonEmptyStr, ActorStr, ReasonStr, StockCount


class StockTransferCreate(CamelModel):
    product_id: NonEmptyStr
    from_location_id: NonEmptyStr
    to_location_id: NonEmptyStr
    quantity: StockCount = Field(..., gt=0)
    reason: Optional[ReasonStr] = None
    notes: Optional[str] = None
    performed_by: ActorStr = SYSTEM_ACTOR


class StockTransferOut(CamelModel):
    id: int
    transfer_code: str
    product_id: str
    product_name: str
    from_location_id: str
    from_location_name: str
    to_location_id: str
    to_location_name: str
    quantity: int
    status: str
    reason: str
    notes: Optional[str]
    created_by: str
    source_stock: int
    destination_stock: int
    created_at: Optional[datetime]


class StockTransferResponse(CamelModel):
    success: bool = True
    message: str
    transfer: StockTransferOut
