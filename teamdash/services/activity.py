# teamdash/services/activity.py
# Append-only audit trail of user actions
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence
import logging

from teamdash.core.config import settings
from teamdash.core.errors import NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.activity import Activity, ActivityCount, ActivityPage
from teamdash.schemas.user import User
from teamdash.services import policy

logger = logging.getLogger(__name__)


class ActivityService:

    def __init__(self, store: Store, clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.clock = clock

    def log_activity(
        self,
        user_id: int,
        action: str,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        details: Optional[str] = None,
    ) -> Activity:
        """Record an action. Runs inside the caller's unit of work."""
        logger.debug("Logging activity user=%s action=%s %s#%s", user_id, action, entity_type, entity_id)
        return self.store.add_activity(
            user_id=user_id, action=action, entity_type=entity_type,
            entity_id=entity_id, details=details, created_at=self.clock(),
        )

    def _require_user(self, user_id: int) -> None:
        if self.store.get_user(user_id) is None:
            raise NotFoundError(f"User not found with id: {user_id}")

    @staticmethod
    def _page_bounds(page: int, size: int) -> tuple:
        page = max(page, 0)
        size = min(max(size, 1), settings.MAX_PAGE_SIZE)
        return page, size

    def _page(self, page: int, size: int, user_ids: Optional[Sequence[int]] = None) -> ActivityPage:
        page, size = self._page_bounds(page, size)
        items, total = self.store.page_activities(offset=page * size, limit=size, user_ids=user_ids)
        return ActivityPage(items=items, total=total, page=page, size=size)

    def get_user_activities(self, user_id: int, actor: User, page: int = 0,
                            size: int = settings.DEFAULT_PAGE_SIZE) -> ActivityPage:
        self._require_user(user_id)
        policy.ensure_can_view_user_data(actor, user_id)
        return self._page(page, size, user_ids=[user_id])

    def get_team_activities(self, user_ids: Sequence[int], page: int = 0,
                            size: int = settings.DEFAULT_PAGE_SIZE) -> ActivityPage:
        logger.info("Fetching team activities for %d users", len(user_ids))
        return self._page(page, size, user_ids=user_ids)

    def get_all_activities(self, page: int = 0, size: int = settings.DEFAULT_PAGE_SIZE) -> ActivityPage:
        return self._page(page, size)

    def get_user_activities_in_range(self, user_id: int, start: datetime, end: datetime, actor: User) -> List[Activity]:
        self._require_user(user_id)
        policy.ensure_can_view_user_data(actor, user_id)
        activities = self.store.activities_in_range(user_id, start, end)
        logger.debug("Found %d activities for user %s in range", len(activities), user_id)
        return activities

    def count_user_activities_since(self, user_id: int, since: datetime, actor: User) -> ActivityCount:
        self._require_user(user_id)
        policy.ensure_can_view_user_data(actor, user_id)
        return ActivityCount(user_id=user_id, since=since, count=self.store.count_activities_since(user_id, since))

    def get_recent_activities(self, limit: int = 10) -> List[Activity]:
        since = self.clock() - timedelta(hours=settings.RECENT_ACTIVITY_HOURS)
        limit = min(max(limit, 1), settings.MAX_PAGE_SIZE)
        return self.store.recent_activities(since, limit)
