# teamdash/api/v1/endpoints/time_tracking.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from datetime import datetime

from teamdash.api import deps
from teamdash.core import security
from teamdash.core.timezones import to_naive_utc
from teamdash.schemas import time_entry as time_schema
from teamdash.schemas.user import User
from teamdash.services.time_tracking import TimeTrackingService

router = APIRouter()

@router.post("/start", response_model=time_schema.TimeEntry, status_code=status.HTTP_201_CREATED)
def start_timer(
    task_id: Optional[int] = None,
    description: Optional[str] = None,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Starts a timer for the current user. Fails if one is already running. """
    return timers.start_timer(current_user, task_id, description)

@router.post("/stop", response_model=time_schema.TimeEntry)
def stop_timer(
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    return timers.stop_timer(current_user)

@router.get("/running", response_model=Optional[time_schema.TimeEntry])
def get_running_timer(
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    """ The running entry, or null when the timer is idle. """
    return timers.get_running_timer(current_user)

@router.post("/manual", response_model=time_schema.TimeEntry, status_code=status.HTTP_201_CREATED)
def create_manual_entry(
    entry_in: time_schema.ManualEntryRequest,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    return timers.create_manual_entry(current_user, entry_in)

@router.get("/user/{user_id}", response_model=List[time_schema.TimeEntry])
def get_user_entries(
    user_id: int,
    start: datetime,
    end: datetime,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    return timers.get_user_entries(user_id, to_naive_utc(start), to_naive_utc(end), current_user)

@router.get("/user/{user_id}/total", response_model=time_schema.TotalTime)
def get_total_time(
    user_id: int,
    start: datetime,
    end: datetime,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    return timers.get_total_minutes(user_id, to_naive_utc(start), to_naive_utc(end), current_user)

@router.get("/team", response_model=List[time_schema.TimeEntry])
def get_team_entries(
    start: datetime,
    end: datetime,
    user_ids: List[int] = Query(...),
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    manager: User = Depends(security.get_current_manager_user)
):
    return timers.get_team_entries(user_ids, to_naive_utc(start), to_naive_utc(end))

@router.get("/task/{task_id}", response_model=List[time_schema.TimeEntry])
def get_task_entries(
    task_id: int,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    manager: User = Depends(security.get_current_manager_user)
):
    return timers.get_task_entries(task_id)

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    timers: TimeTrackingService = Depends(deps.get_time_tracking_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Owners delete their own entries; managers delete anyone's. """
    timers.delete_entry(entry_id, current_user)
    return
