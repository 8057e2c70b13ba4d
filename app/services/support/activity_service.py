# app/services/support/activity_service.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, asc

from app.models.support.activity_models import ActivityLog
from app.schemas.support.activity_schemas import ActivityOut, ActivityListData
from app.utils.logger import get_logger

logger = get_logger(__name__)


async def list_activities(
    db: AsyncSession,
    *,
    actor: Optional[str] = None,
    code: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
    sort_order: str = "desc",
) -> ActivityListData:
    # -------------------------
    # Base queries
    # -------------------------
    query = select(ActivityLog)
    count_query = select(func.count(ActivityLog.id))

    # -------------------------
    # Filters
    # -------------------------
    if actor:
        query = query.where(ActivityLog.actor.ilike(f"%{actor}%"))
        count_query = count_query.where(ActivityLog.actor.ilike(f"%{actor}%"))

    if code:
        query = query.where(ActivityLog.code == code)
        count_query = count_query.where(ActivityLog.code == code)

    # -------------------------
    # Sorting + pagination
    # -------------------------
    order_fn = desc if sort_order == "desc" else asc
    offset = (page - 1) * page_size
    query = query.order_by(order_fn(ActivityLog.id)).limit(page_size).offset(offset)

    total = await db.scalar(count_query)
    result = await db.execute(query)

    logger.info(
        "Activities fetched",
        extra={"total": total, "page": page, "page_size": page_size},
    )

    return ActivityListData(
        total=total or 0,
        items=[ActivityOut.model_validate(a) for a in result.scalars().all()],
    )
