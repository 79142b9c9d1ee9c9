# teamdash/api/v1/api.py
from fastapi import APIRouter
from teamdash.api.v1.endpoints import activities, chat, dashboard, leave, projects, tasks, time_tracking, users

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
api_router.include_router(time_tracking.router, prefix="/time-tracking", tags=["Time Tracking"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])
api_router.include_router(activities.router, prefix="/activities", tags=["Activities"])
api_router.include_router(leave.router, tags=["Leave & Attendance"])
