# teamdash/schemas/time_entry.py
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from teamdash.core.timezones import to_naive_utc


class TimeEntry(BaseModel):
    id: int
    user_id: int
    user_name: str
    task_id: Optional[int] = None
    task_title: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    description: Optional[str] = None
    is_manual: bool = False
    is_running: bool = False


class ManualEntryRequest(BaseModel):
    task_id: Optional[int] = None
    # Both bounds are checked by the service so a missing one is a 400
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TotalTime(BaseModel):
    user_id: int
    total_minutes: int
    total_hours: float
    start: datetime
    end: datetime
