"""
Seed a development database with sample products, locations and stock.

    python -m app.scripts.seed_catalog
"""
import asyncio

from sqlalchemy import select

from app.core.config import APP_ENV
from app.core.db import AsyncSessionLocal, init_models
from app.core.logging import setup_logging
from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit
from app.utils.logger import get_logger

logger = get_logger(__name__)

LOCATIONS = ["Downtown Salon", "Uptown Spa", "Warehouse"]

# (name, sku, is_retail, initial stock per location)
PRODUCTS = [
    ("Argan Oil Shampoo", "SHP-ARG-250", True, 24),
    ("Keratin Conditioner", "CND-KER-250", True, 18),
    ("Color Developer 20 Vol", "PRO-DEV-020", False, 12),
    ("Bond Repair Treatment", "PRO-BND-100", False, 6),
]


async def seed_catalog():
    await init_models()

    async with AsyncSessionLocal() as session:
        existing = await session.scalar(select(Product.id).limit(1))
        if existing:
            logger.info("Catalog already seeded, nothing to do")
            return

        locations = [Location(name=name) for name in LOCATIONS]
        products = [
            Product(name=name, sku=sku, is_retail=is_retail)
            for name, sku, is_retail, _ in PRODUCTS
        ]
        session.add_all(locations + products)
        await session.flush()

        for product, (_, _, _, stock) in zip(products, PRODUCTS):
            for location in locations:
                session.add(
                    ProductLocation(
                        product_id=product.id,
                        location_id=location.id,
                        stock=stock,
                    )
                )
                session.add(
                    InventoryAudit(
                        product_id=product.id,
                        location_id=location.id,
                        adjustment_type="set",
                        quantity=stock,
                        previous_stock=0,
                        new_stock=stock,
                        reason="Initial stock",
                    )
                )

        await session.commit()
        logger.info(
            "Catalog seeded",
            extra={"products": len(products), "locations": len(locations)},
        )


if __name__ == "__main__":
    if APP_ENV != "development":
        raise SystemExit("seed_catalog only runs in development")
    setup_logging()
    asyncio.run(seed_catalog())
