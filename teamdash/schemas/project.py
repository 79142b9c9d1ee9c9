# teamdash/schemas/project.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from teamdash.core.enums import ProjectMemberRole, ProjectStatus
from teamdash.schemas.user import UserRef


class Project(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    status: ProjectStatus
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")
    manager: Optional[UserRef] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = None
    revenue: Optional[Decimal] = None
    expenses: Optional[Decimal] = None
    member_ids: List[int] = []


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    status: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: Optional[Decimal] = None
    revenue: Optional[Decimal] = None
    expenses: Optional[Decimal] = None


class Financials(BaseModel):
    revenue: Optional[Decimal] = None
    expenses: Optional[Decimal] = None


class ProjectMember(BaseModel):
    id: int
    project_id: int
    user_id: int
    user_name: str
    user_email: str
    role: ProjectMemberRole
    joined_at: Optional[datetime] = None


class AddMemberRequest(BaseModel):
    user_id: int
    role: Optional[str] = None
