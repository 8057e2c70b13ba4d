# app/services/catalog/product_service.py

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.config import ALLOW_NEGATIVE_STOCK
from app.core.exceptions import NotFoundError
from app.constants.error_codes import ErrorCode
from app.constants.activity_codes import ActivityCode
from app.models.catalog.product_models import Product
from app.models.catalog.location_models import Location
from app.schemas.catalog.product_schemas import StockPolicyUpdate, StockPolicyOut
from app.utils.activity_helpers import emit_activity
from app.utils.logger import get_logger

logger = get_logger(__name__)


# =====================================================
# LOOKUPS
# =====================================================
async def get_product_or_404(db: AsyncSession, product_id: str) -> Product:
    product = await db.scalar(select(Product).where(Product.id == product_id))
    if not product:
        raise NotFoundError(
            "Product not found",
            ErrorCode.PRODUCT_NOT_FOUND,
            {"productId": product_id},
        )
    return product


async def get_location_or_404(db: AsyncSession, location_id: str) -> Location:
    location = await db.scalar(select(Location).where(Location.id == location_id))
    if not location:
        raise NotFoundError(
            "Location not found",
            ErrorCode.LOCATION_NOT_FOUND,
            {"locationId": location_id},
        )
    return location


# =====================================================
# NEGATIVE STOCK POLICY
# =====================================================
def allows_negative_stock(product: Product) -> bool:
    if product.allow_negative_stock is not None:
        return product.allow_negative_stock
    return ALLOW_NEGATIVE_STOCK


def _describe_policy(value: bool | None) -> str:
    if value is None:
        default = "allowed" if ALLOW_NEGATIVE_STOCK else "blocked"
        return f"inherit (default {default})"
    return "allowed" if value else "blocked"


def _map_policy(product: Product) -> StockPolicyOut:
    return StockPolicyOut(
        product_id=product.id,
        product_name=product.name,
        allow_negative_stock=product.allow_negative_stock,
        effective_allow_negative_stock=allows_negative_stock(product),
    )


async def get_stock_policy(db: AsyncSession, product_id: str) -> StockPolicyOut:
    product = await get_product_or_404(db, product_id)
    return _map_policy(product)


async def update_stock_policy(
    db: AsyncSession,
    product_id: str,
    payload: StockPolicyUpdate,
) -> StockPolicyOut:
    product = await get_product_or_404(db, product_id)

    old_value = product.allow_negative_stock
    if old_value == payload.allow_negative_stock:
        return _map_policy(product)

    try:
        product.allow_negative_stock = payload.allow_negative_stock

        await emit_activity(
            db,
            actor=payload.performed_by,
            code=ActivityCode.UPDATE_STOCK_POLICY,
            product_name=product.name,
            old_policy=_describe_policy(old_value),
            new_policy=_describe_policy(payload.allow_negative_stock),
        )

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Negative stock policy changed",
        extra={
            "product_id": product.id,
            "old": old_value,
            "new": payload.allow_negative_stock,
            "actor": payload.performed_by,
        },
    )

    return _map_policy(product)
