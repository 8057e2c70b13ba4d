from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.schemas.support.activity_schemas import ActivityListData
from app.services.support.activity_service import list_activities
from app.utils.response import APIResponse, success_response
from app.utils.logger import get_logger

router = APIRouter(prefix="/activities", tags=["Activities"])
logger = get_logger(__name__)


@router.get("", response_model=APIResponse[ActivityListData])
async def list_activities_api(
    actor: Optional[str] = Query(None),
    code: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db),
):
    logger.info(
        "List activities requested",
        extra={"actor": actor, "code": code, "page": page},
    )

    result = await list_activities(
        db,
        actor=actor,
        code=code,
        page=page,
        page_size=page_size,
        sort_order=sort_order,
    )

    return success_response("Activities fetched successfully", result)
