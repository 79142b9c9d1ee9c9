# teamdash/api/deps.py
# Per-request service wiring over one database session
from fastapi import Depends
from sqlalchemy.orm import Session

from teamdash.db import session
from teamdash.db.store import Store
from teamdash.services.activity import ActivityService
from teamdash.services.auth import AuthService
from teamdash.services.chat import ChatService
from teamdash.services.dashboard import DashboardService
from teamdash.services.leave import LeaveService
from teamdash.services.projects import ProjectService
from teamdash.services.tasks import TaskService
from teamdash.services.time_tracking import TimeTrackingService


def get_store(db: Session = Depends(session.get_db)) -> Store:
    return Store(db)

def get_activity_service(store: Store = Depends(get_store)) -> ActivityService:
    return ActivityService(store)

def get_auth_service(store: Store = Depends(get_store)) -> AuthService:
    return AuthService(store)

def get_chat_service(store: Store = Depends(get_store)) -> ChatService:
    return ChatService(store)

def get_dashboard_service(store: Store = Depends(get_store)) -> DashboardService:
    return DashboardService(store)

def get_project_service(store: Store = Depends(get_store)) -> ProjectService:
    return ProjectService(store)

def get_task_service(store: Store = Depends(get_store)) -> TaskService:
    return TaskService(store, ActivityService(store))

def get_time_tracking_service(store: Store = Depends(get_store)) -> TimeTrackingService:
    return TimeTrackingService(store, ActivityService(store))

def get_leave_service(store: Store = Depends(get_store)) -> LeaveService:
    return LeaveService(store, ActivityService(store))
