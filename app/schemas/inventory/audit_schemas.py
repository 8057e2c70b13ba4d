from typing import List, Optional
from datetime import datetime

from app.schemas.base import CamelModel


class InventoryAuditOut(CamelModel):
    id: int
    product_id: str
    location_id: str
    adjustment_type: str
    quantity: int
    previous_stock: int
    new_stock: int
    reason: str
    notes: Optional[str]
    user_id: str
    timestamp: datetime


class InventoryAuditListData(CamelModel):
    total: int
    items: List[InventoryAuditOut]


class StockLevelOut(CamelModel):
    product_id: str
    product_name: str
    location_id: str
    location_name: str
    stock: int
    is_active: bool
    updated_at: Optional[datetime]
