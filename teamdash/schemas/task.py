# teamdash/schemas/task.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

from teamdash.core.enums import Priority, TaskStatus
from teamdash.schemas.user import UserRef


class Task(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: Priority
    due_date: Optional[date] = None
    completed_date: Optional[date] = None
    assigned_to: UserRef
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to_id: int


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    assigned_to_id: Optional[int] = None
