# teamdash/services/dashboard.py
from datetime import date
from typing import Callable
import logging

from teamdash.db.store import Store
from teamdash.schemas.dashboard import DashboardSummary, EnhancedDashboardSummary
from teamdash.schemas.user import User
from teamdash.services import analytics

logger = logging.getLogger(__name__)


class DashboardService:
    """Loads task snapshots from the store and hands them to the analytics functions."""

    def __init__(self, store: Store, today: Callable[[], date] = date.today):
        self.store = store
        self.today = today

    def get_summary(self) -> DashboardSummary:
        users, tasks = self.store.list_users(), self.store.list_tasks()
        summary = analytics.build_summary(users, tasks)
        logger.debug("Dashboard summary: total=%d completed=%d", summary.total_tasks, summary.completed_tasks)
        return summary

    def get_enhanced_summary(self) -> EnhancedDashboardSummary:
        users, tasks = self.store.list_users(), self.store.list_tasks()
        return analytics.build_enhanced_summary(users, tasks, self.today())

    def get_personal_dashboard(self, actor: User) -> EnhancedDashboardSummary:
        tasks = self.store.list_tasks(assigned_to_id=actor.id)
        return analytics.build_enhanced_summary([actor], tasks, self.today())
