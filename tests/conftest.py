import os
import tempfile

# Must be set before anything under app/ reads its config
_DB_DIR = tempfile.mkdtemp(prefix="salon-inventory-tests-")
os.environ["APP_ENV"] = "development"
os.environ["DB_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["ALLOW_NEGATIVE_STOCK"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select, func

from main import app
from app.core.db import Base, engine, AsyncSessionLocal
from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location
from app.models.inventory.product_location_models import ProductLocation
from app.models.inventory.inventory_audit_models import InventoryAudit
from app.models.inventory.stock_transfer_models import StockTransfer
from app.models.support.activity_models import ActivityLog


@pytest.fixture(autouse=True)
async def reset_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client():
    # Unhandled errors must come back as 500 responses, not raise in the test
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class Store:
    """
    Direct database access for arranging and inspecting state.

    Every call uses its own short-lived session so nothing holds a SQLite
    lock while a request is in flight.
    """

    async def product(self, name="Argan Oil Shampoo", *, is_retail=True, is_active=True,
                      allow_negative_stock=None) -> str:
        async with AsyncSessionLocal() as session:
            product = Product(
                name=name,
                is_retail=is_retail,
                is_active=is_active,
                allow_negative_stock=allow_negative_stock,
            )
            session.add(product)
            await session.commit()
            return product.id

    async def location(self, name="Downtown Salon", *, is_active=True) -> str:
        async with AsyncSessionLocal() as session:
            location = Location(name=name, is_active=is_active)
            session.add(location)
            await session.commit()
            return location.id

    async def set_stock(self, product_id, location_id, stock) -> None:
        async with AsyncSessionLocal() as session:
            session.add(
                ProductLocation(
                    product_id=product_id,
                    location_id=location_id,
                    stock=stock,
                )
            )
            await session.commit()

    async def stock(self, product_id, location_id):
        async with AsyncSessionLocal() as session:
            return await session.scalar(
                select(ProductLocation.stock).where(
                    ProductLocation.product_id == product_id,
                    ProductLocation.location_id == location_id,
                )
            )

    async def audits(self, product_id=None, location_id=None):
        query = select(InventoryAudit).order_by(InventoryAudit.id)
        if product_id:
            query = query.where(InventoryAudit.product_id == product_id)
        if location_id:
            query = query.where(InventoryAudit.location_id == location_id)
        async with AsyncSessionLocal() as session:
            return list((await session.execute(query)).scalars().all())

    async def count(self, model) -> int:
        async with AsyncSessionLocal() as session:
            return await session.scalar(select(func.count()).select_from(model))

    async def activities(self):
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(ActivityLog).order_by(ActivityLog.id))
            return list(result.scalars().all())

    async def transfers(self):
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(StockTransfer))
            return list(result.scalars().all())


@pytest.fixture
def store():
    return Store()
