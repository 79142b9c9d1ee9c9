# teamdash/api/v1/endpoints/activities.py
from fastapi import APIRouter, Depends, Query
from typing import List
from datetime import datetime

from teamdash.api import deps
from teamdash.core import security
from teamdash.core.config import settings
from teamdash.core.timezones import to_naive_utc
from teamdash.schemas import activity as activity_schema
from teamdash.schemas.user import User
from teamdash.services.activity import ActivityService

router = APIRouter()

@router.get("/user/{user_id}", response_model=activity_schema.ActivityPage)
def read_user_activities(
    user_id: int,
    page: int = 0,
    size: int = settings.DEFAULT_PAGE_SIZE,
    activities: ActivityService = Depends(deps.get_activity_service),
    current_user: User = Depends(security.get_current_user)
):
    return activities.get_user_activities(user_id, current_user, page, size)

@router.get("/user/{user_id}/range", response_model=List[activity_schema.Activity])
def read_user_activities_in_range(
    user_id: int,
    start: datetime,
    end: datetime,
    activities: ActivityService = Depends(deps.get_activity_service),
    current_user: User = Depends(security.get_current_user)
):
    return activities.get_user_activities_in_range(user_id, to_naive_utc(start), to_naive_utc(end), current_user)

@router.get("/user/{user_id}/count", response_model=activity_schema.ActivityCount)
def count_user_activities(
    user_id: int,
    since: datetime,
    activities: ActivityService = Depends(deps.get_activity_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Managers count anyone, employees only themselves. """
    return activities.count_user_activities_since(user_id, to_naive_utc(since), current_user)

@router.get("/team", response_model=activity_schema.ActivityPage)
def read_team_activities(
    user_ids: List[int] = Query(...),
    page: int = 0,
    size: int = settings.DEFAULT_PAGE_SIZE,
    activities: ActivityService = Depends(deps.get_activity_service),
    manager: User = Depends(security.get_current_manager_user)
):
    return activities.get_team_activities(user_ids, page, size)

@router.get("/all", response_model=activity_schema.ActivityPage)
def read_all_activities(
    page: int = 0,
    size: int = settings.DEFAULT_PAGE_SIZE,
    activities: ActivityService = Depends(deps.get_activity_service),
    manager: User = Depends(security.get_current_manager_user)
):
    return activities.get_all_activities(page, size)

@router.get("/recent", response_model=List[activity_schema.Activity])
def read_recent_activities(
    limit: int = 10,
    activities: ActivityService = Depends(deps.get_activity_service),
    manager: User = Depends(security.get_current_manager_user)
):
    """ Newest activities from the last day, across the whole team. """
    return activities.get_recent_activities(limit)
