# app/routers/__init__.py

from .inventory.adjustment_router import router as adjustment_router
from .inventory.bulk_stock_router import router as bulk_stock_router
from .inventory.transfer_router import router as transfer_router
from .inventory.audit_router import router as audit_router

from .catalog.product_router import router as product_router

from .support.activity_router import router as activity_router


__all__ = [
"adjustment_router",
"bulk_stock_router",
"transfer_router",
"audit_router",

"product_router",

"activity_router",
]
