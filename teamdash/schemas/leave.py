# teamdash/schemas/leave.py
from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime

from teamdash.core.enums import AttendanceStatus, LeaveStatus, LeaveType


class LeaveRequest(BaseModel):
    id: int
    user_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_count: int
    reason: Optional[str] = None
    status: LeaveStatus
    reviewed_by_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LeaveCreate(BaseModel):
    leave_type: Optional[str] = None
    start_date: date
    end_date: date
    reason: Optional[str] = None


class Attendance(BaseModel):
    id: int
    user_id: int
    work_date: date
    status: AttendanceStatus
    work_hours: Optional[float] = None

    class Config:
        from_attributes = True


class AttendanceMark(BaseModel):
    work_date: Optional[date] = None
    status: Optional[str] = None
    work_hours: Optional[float] = None
