from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.core.config import SYSTEM_ACTOR
from app.schemas.base import CamelModel, NonEmptyStr, ActorStr, ReasonStr, StockCount


# =====================================================
# SINGLE LOCATION
# =====================================================
class StockAdjustmentCreate(CamelModel):
    product_id: NonEmptyStr
    location_id: NonEmptyStr
    quantity: StockCount = Field(..., gt=0, description="Units to add or remove. Must be positive.")
    adjustment_type: Literal["add", "remove"]
    reason: ReasonStr
    notes: Optional[str] = None
    performed_by: ActorStr = SYSTEM_ACTOR


class ProductLocationSnapshot(CamelModel):
    product_id: str
    product_name: str
    location_id: str
    location_name: str
    stock: int


class StockAdjustmentResult(CamelModel):
    previous_stock: int
    new_stock: int
    adjustment: int
    product_location: ProductLocationSnapshot


class StockAdjustmentResponse(StockAdjustmentResult):
    success: bool = True
    message: str
    audit_trail: bool = True


# =====================================================
# MULTI LOCATION
# =====================================================
class LocationAdjustmentItem(CamelModel):
    location_id: NonEmptyStr
    new_stock: StockCount = Field(..., ge=0)
    operation: Literal["add", "remove", "set"]


class MultiLocationAdjustmentCreate(CamelModel):
    product_id: NonEmptyStr
    adjustments: List[LocationAdjustmentItem] = Field(..., min_length=1)
    reason: ReasonStr
    notes: Optional[str] = None
    performed_by: ActorStr = SYSTEM_ACTOR

    @field_validator("adjustments")
    @classmethod
    def reject_duplicate_locations(cls, adjustments):
        seen = set()
        duplicates = []
        for item in adjustments:
            if item.location_id in seen and item.location_id not in duplicates:
                duplicates.append(item.location_id)
            seen.add(item.location_id)
        if duplicates:
            raise ValueError(f"Duplicate locations in batch: {', '.join(duplicates)}")
        return adjustments


class LocationAdjustmentResult(CamelModel):
    location_id: str
    location_name: str
    previous_stock: int
    new_stock: int
    change: int
    operation: str


class MultiLocationSummary(CamelModel):
    locations_updated: int
    total_previous_stock: int
    total_new_stock: int
    total_change: int


class MultiLocationAdjustmentResult(CamelModel):
    product_id: str
    product_name: str
    adjustments: List[LocationAdjustmentResult]
    summary: MultiLocationSummary


class MultiLocationAdjustmentResponse(MultiLocationAdjustmentResult):
    success: bool = True
    message: str
    audit_trail: bool = True


# =====================================================
# CAPABILITY DESCRIPTOR
# =====================================================
class EndpointDescriptor(CamelModel):
    message: str
    timestamp: str
    methods: List[str]
    required_fields: List[str]
    adjustment_fields: Optional[List[str]] = None
