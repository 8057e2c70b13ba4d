# app/schemas/support/activity_schemas.py

from typing import List
from datetime import datetime

from app.schemas.base import CamelModel


class ActivityOut(CamelModel):
    id: int
    actor: str
    code: str
    message: str
    created_at: datetime


class ActivityListData(CamelModel):
    total: int
    items: List[ActivityOut]
