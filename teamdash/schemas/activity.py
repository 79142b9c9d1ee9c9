# teamdash/schemas/activity.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class Activity(BaseModel):
    id: int
    user_id: int
    user_name: str
    user_email: str
    action: str
    entity_type: Optional[str] = None
    entity_id: Optional[int] = None
    details: Optional[str] = None
    created_at: datetime


class ActivityPage(BaseModel):
    items: List[Activity]
    total: int
    page: int
    size: int


class ActivityCount(BaseModel):
    user_id: int
    since: datetime
    count: int
