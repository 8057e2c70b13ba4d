from typing import List

from pydantic import Field

from app.core.config import DEFAULT_BULK_STOCK_TO_ADD, SYSTEM_ACTOR
from app.schemas.base import CamelModel, ActorStr, StockCount


class BulkAddStockRequest(CamelModel):
    stock_to_add: StockCount = Field(default=DEFAULT_BULK_STOCK_TO_ADD, gt=0)
    performed_by: ActorStr = SYSTEM_ACTOR


class BulkStockUpdate(CamelModel):
    product_id: str
    product_name: str
    location_id: str
    location_name: str
    previous_stock: int
    new_stock: int
    stock_added: int


class LocationRef(CamelModel):
    id: str
    name: str


class BulkAddStockResult(CamelModel):
    products_updated: int
    locations_updated: int
    total_updates: int
    stock_added_per_location: int
    updates: List[BulkStockUpdate]
    locations: List[LocationRef]


class BulkAddStockResponse(CamelModel):
    success: bool = True
    message: str
    result: BulkAddStockResult


# =====================================================
# STOCK SUMMARY (GET)
# =====================================================
class LocationStockSummary(CamelModel):
    location_id: str
    location_name: str
    total_products: int
    total_stock: int
    retail_products: int
    professional_products: int
    low_stock_products: int
    out_of_stock_products: int


class StockSummaryResponse(CamelModel):
    summary: List[LocationStockSummary]
    total_locations: int
    low_stock_threshold: int
    last_updated: str
