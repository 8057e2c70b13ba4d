# app/services/inventory/audit_service.py

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit
from app.schemas.inventory.audit_schemas import (
    InventoryAuditOut,
    InventoryAuditListData,
    StockLevelOut,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def list_audit_records(
    db: AsyncSession,
    *,
    product_id: Optional[str] = None,
    location_id: Optional[str] = None,
    page: int = 1,
    page_size: int = 50,
) -> InventoryAuditListData:
    query = select(InventoryAudit)
    count_query = select(func.count(InventoryAudit.id))

    if product_id:
        query = query.where(InventoryAudit.product_id == product_id)
        count_query = count_query.where(InventoryAudit.product_id == product_id)

    if location_id:
        query = query.where(InventoryAudit.location_id == location_id)
        count_query = count_query.where(InventoryAudit.location_id == location_id)

    # id is the ledger order; timestamps can tie inside one transaction
    offset = (page - 1) * page_size
    query = query.order_by(InventoryAudit.id.desc()).limit(page_size).offset(offset)

    total = await db.scalar(count_query)
    result = await db.execute(query)

    logger.info(
        "Inventory audit fetched",
        extra={"total": total, "page": page, "page_size": page_size},
    )

    return InventoryAuditListData(
        total=total or 0,
        items=[InventoryAuditOut.model_validate(a) for a in result.scalars().all()],
    )


async def list_stock_levels(
    db: AsyncSession,
    *,
    product_id: Optional[str] = None,
    location_id: Optional[str] = None,
) -> List[StockLevelOut]:
    query = (
        select(
            ProductLocation.product_id,
            Product.name.label("product_name"),
            ProductLocation.location_id,
            Location.name.label("location_name"),
            ProductLocation.stock,
            ProductLocation.is_active,
            ProductLocation.updated_at,
        )
        .join(Product, Product.id == ProductLocation.product_id)
        .join(Location, Location.id == ProductLocation.location_id)
        .order_by(Product.name, Location.name)
    )

    if product_id:
        query = query.where(ProductLocation.product_id == product_id)
    if location_id:
        query = query.where(ProductLocation.location_id == location_id)

    result = await db.execute(query)
    return [StockLevelOut.model_validate(dict(row._mapping)) for row in result.all()]
