# teamdash/api/v1/endpoints/leave.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional
from datetime import date

from teamdash.api import deps
from teamdash.core import security
from teamdash.schemas import leave as leave_schema
from teamdash.schemas.user import User
from teamdash.services.leave import LeaveService

router = APIRouter()

@router.post("/leave", response_model=leave_schema.LeaveRequest, status_code=status.HTTP_201_CREATED)
def submit_leave(
    leave_in: leave_schema.LeaveCreate,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.submit_leave(current_user, leave_in)

@router.get("/leave/me", response_model=List[leave_schema.LeaveRequest])
def read_my_leaves(
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.list_my_leaves(current_user)

@router.get("/leave", response_model=List[leave_schema.LeaveRequest])
def read_leaves(
    status: Optional[str] = None,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    """ All leave requests, optionally filtered by status. Managers only. """
    return leaves.list_leaves(current_user, status)

@router.post("/leave/{leave_id}/approve", response_model=leave_schema.LeaveRequest)
def approve_leave(
    leave_id: int,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.decide_leave(leave_id, True, current_user)

@router.post("/leave/{leave_id}/reject", response_model=leave_schema.LeaveRequest)
def reject_leave(
    leave_id: int,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.decide_leave(leave_id, False, current_user)

@router.post("/leave/{leave_id}/cancel", response_model=leave_schema.LeaveRequest)
def cancel_leave(
    leave_id: int,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.cancel_leave(leave_id, current_user)

@router.post("/attendance", response_model=leave_schema.Attendance)
def mark_attendance(
    attendance_in: leave_schema.AttendanceMark,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Marks today (or the given day) for the current user. Marking again overwrites. """
    return leaves.mark_attendance(current_user, attendance_in)

@router.get("/attendance/user/{user_id}", response_model=List[leave_schema.Attendance])
def read_attendance(
    user_id: int,
    start: date,
    end: date,
    leaves: LeaveService = Depends(deps.get_leave_service),
    current_user: User = Depends(security.get_current_user)
):
    return leaves.list_attendance(user_id, start, end, current_user)
