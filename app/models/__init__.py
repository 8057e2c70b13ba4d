# Catalog
from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location

# Inventory
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit
from app.models.inventory.stock_transfer_models import StockTransfer

# Support
from app.models.support.activity_models import ActivityLog
