# teamdash/services/time_tracking.py
"""
Timer state machine per user: Idle -> Running -> Idle.

A running entry is one without an end time. The service checks for it
before starting and the store's partial unique index rejects a second one
if two starts race, so a user never has two running entries.
"""
from datetime import datetime
from typing import Callable, List, Optional, Sequence
import logging

from teamdash.core.errors import BadRequestError, NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.time_entry import ManualEntryRequest, TimeEntry, TotalTime
from teamdash.schemas.user import User
from teamdash.services import policy
from teamdash.services.activity import ActivityService

logger = logging.getLogger(__name__)

ENTITY_TYPE = "TimeEntry"


def duration_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between start and end, rounded down."""
    return int((end - start).total_seconds() // 60)


class TimeTrackingService:

    def __init__(self, store: Store, activities: ActivityService,
                 clock: Callable[[], datetime] = datetime.utcnow):
        self.store = store
        self.activities = activities
        self.clock = clock

    def _resolve_task_title(self, task_id: Optional[int]) -> Optional[str]:
        if task_id is None:
            return None
        task = self.store.get_task(task_id)
        if task is None:
            logger.error("Task not found: %s", task_id)
            raise NotFoundError(f"Task not found with id: {task_id}")
        return task.title

    def start_timer(self, user: User, task_id: Optional[int] = None,
                    description: Optional[str] = None) -> TimeEntry:
        logger.info("Starting timer for user %s, task %s", user.email, task_id)
        with self.store.atomic():
            if self.store.get_running_entry(user.id) is not None:
                logger.warning("User %s already has a running timer", user.email)
                raise BadRequestError("You already have a running timer. Please stop it first.")
            task_title = self._resolve_task_title(task_id)
            entry = self.store.add_time_entry(
                user_id=user.id, task_id=task_id, start_time=self.clock(),
                description=description, is_manual=False,
            )
            task_info = f" for task: {task_title}" if task_title else ""
            self.activities.log_activity(user.id, "TIMER_STARTED", ENTITY_TYPE, entry.id, f"Started timer{task_info}")
        logger.info("Timer started with id %s", entry.id)
        return entry

    def stop_timer(self, user: User) -> TimeEntry:
        logger.info("Stopping timer for user %s", user.email)
        with self.store.atomic():
            running = self.store.get_running_entry(user.id)
            if running is None:
                logger.warning("No running timer found for user %s", user.email)
                raise NotFoundError("No running timer found")
            end_time = self.clock()
            entry = self.store.close_time_entry(
                running.id, end_time, duration_minutes(running.start_time, end_time)
            )
            task_info = f" for task: {entry.task_title}" if entry.task_title else ""
            self.activities.log_activity(
                user.id, "TIMER_STOPPED", ENTITY_TYPE, entry.id,
                f"Stopped timer{task_info} - Duration: {entry.duration_minutes} minutes",
            )
        logger.info("Timer stopped. Duration: %s minutes", entry.duration_minutes)
        return entry

    def get_running_timer(self, user: User) -> Optional[TimeEntry]:
        return self.store.get_running_entry(user.id)

    def create_manual_entry(self, user: User, request: ManualEntryRequest) -> TimeEntry:
        """Back-fill a closed entry. Overlap with other entries is allowed."""
        logger.info("Creating manual time entry for user %s", user.email)
        if request.start_time is None or request.end_time is None:
            raise BadRequestError("Start time and end time are required")
        if request.end_time < request.start_time:
            raise BadRequestError("End time cannot be before start time")
        with self.store.atomic():
            self._resolve_task_title(request.task_id)
            entry = self.store.add_time_entry(
                user_id=user.id, task_id=request.task_id,
                start_time=request.start_time, end_time=request.end_time,
                duration_minutes=duration_minutes(request.start_time, request.end_time),
                description=request.description, is_manual=True,
            )
            self.activities.log_activity(
                user.id, "TIME_ENTRY_CREATED", ENTITY_TYPE, entry.id,
                f"Created manual time entry - Duration: {entry.duration_minutes} minutes",
            )
        return entry

    def _require_user(self, user_id: int) -> None:
        if self.store.get_user(user_id) is None:
            raise NotFoundError(f"User not found with id: {user_id}")

    def get_user_entries(self, user_id: int, start: datetime, end: datetime, actor: User) -> List[TimeEntry]:
        self._require_user(user_id)
        policy.ensure_can_view_user_data(actor, user_id)
        entries = self.store.list_user_entries(user_id, start, end)
        logger.debug("Found %d time entries for user %s", len(entries), user_id)
        return entries

    def get_total_minutes(self, user_id: int, start: datetime, end: datetime, actor: User) -> TotalTime:
        self._require_user(user_id)
        policy.ensure_can_view_user_data(actor, user_id)
        total = self.store.total_minutes(user_id, start, end)
        return TotalTime(user_id=user_id, total_minutes=total, total_hours=total / 60.0, start=start, end=end)

    def get_team_entries(self, user_ids: Sequence[int], start: datetime, end: datetime) -> List[TimeEntry]:
        logger.info("Fetching team time entries for %d users", len(user_ids))
        return self.store.list_team_entries(user_ids, start, end)

    def get_task_entries(self, task_id: int) -> List[TimeEntry]:
        return self.store.list_task_entries(task_id)

    def delete_entry(self, entry_id: int, actor: User) -> None:
        logger.info("Deleting time entry %s by user %s", entry_id, actor.email)
        with self.store.atomic():
            entry = self.store.get_time_entry(entry_id)
            if entry is None:
                raise NotFoundError("Time entry not found")
            policy.ensure_can_delete_time_entry(actor, entry)
            self.store.delete_time_entry(entry_id)
            self.activities.log_activity(actor.id, "TIME_ENTRY_DELETED", ENTITY_TYPE, entry_id, "Deleted time entry")
