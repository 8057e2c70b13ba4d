from typing import Optional

from app.core.config import SYSTEM_ACTOR
from app.schemas.base import CamelModel, ActorStr


class StockPolicyUpdate(CamelModel):
    # None -> inherit the ALLOW_NEGATIVE_STOCK default
    allow_negative_stock: Optional[bool]
    performed_by: ActorStr = SYSTEM_ACTOR


class StockPolicyOut(CamelModel):
    product_id: str
    product_name: str
    allow_negative_stock: Optional[bool]
    effective_allow_negative_stock: bool
