# teamdash/api/v1/endpoints/dashboard.py
from fastapi import APIRouter, Depends

from teamdash.api import deps
from teamdash.core import security
from teamdash.schemas import dashboard as dashboard_schema
from teamdash.schemas.user import User
from teamdash.services.dashboard import DashboardService

router = APIRouter()

@router.get("/summary", response_model=dashboard_schema.DashboardSummary)
def read_summary(
    dashboard: DashboardService = Depends(deps.get_dashboard_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Task totals, on-time completion and one productivity score per user. """
    return dashboard.get_summary()

@router.get("/enhanced", response_model=dashboard_schema.EnhancedDashboardSummary)
def read_enhanced_summary(
    dashboard: DashboardService = Depends(deps.get_dashboard_service),
    current_user: User = Depends(security.get_current_user)
):
    return dashboard.get_enhanced_summary()

@router.get("/personal", response_model=dashboard_schema.EnhancedDashboardSummary)
def read_personal_dashboard(
    dashboard: DashboardService = Depends(deps.get_dashboard_service),
    current_user: User = Depends(security.get_current_user)
):
    """ The enhanced summary restricted to the current user's own tasks. """
    return dashboard.get_personal_dashboard(current_user)
