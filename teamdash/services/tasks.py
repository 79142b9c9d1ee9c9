# teamdash/services/tasks.py
from datetime import date
from typing import Callable, List, Optional
import logging

from teamdash.core.enums import Priority, TaskStatus, parse_enum_or_default
from teamdash.core.errors import NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.task import Task, TaskCreate, TaskUpdate
from teamdash.schemas.user import User
from teamdash.services import policy
from teamdash.services.activity import ActivityService

logger = logging.getLogger(__name__)

ENTITY_TYPE = "Task"


class TaskService:

    def __init__(self, store: Store, activities: ActivityService, today: Callable[[], date] = date.today):
        self.store = store
        self.activities = activities
        self.today = today

    def _require_user(self, user_id: int) -> User:
        user = self.store.get_user(user_id)
        if user is None:
            logger.error("User not found with id: %s", user_id)
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    def get_task(self, task_id: int) -> Task:
        task = self.store.get_task(task_id)
        if task is None:
            raise NotFoundError(f"Task not found with id: {task_id}")
        return task

    def create_task(self, request: TaskCreate, actor: User) -> Task:
        logger.info("Creating task '%s' assigned to user %s", request.title, request.assigned_to_id)
        self._require_user(request.assigned_to_id)
        policy.require_manager(actor, "create tasks")
        priority = parse_enum_or_default(Priority, request.priority, Priority.MEDIUM)
        with self.store.atomic():
            task = self.store.add_task(
                title=request.title, description=request.description,
                status=TaskStatus.PENDING.value, priority=priority.value,
                due_date=request.due_date, assigned_to_id=request.assigned_to_id,
            )
            self.activities.log_activity(actor.id, "TASK_CREATED", ENTITY_TYPE, task.id, f"Created task: {task.title}")
        logger.info("Task created with id %s", task.id)
        return task

    def list_tasks(self, assigned_to_id: Optional[int] = None, status: Optional[str] = None) -> List[Task]:
        if assigned_to_id is not None:
            self._require_user(assigned_to_id)
        # An unrecognised status filter means no status filter
        parsed = parse_enum_or_default(TaskStatus, status, None)
        return self.store.list_tasks(assigned_to_id=assigned_to_id, status=parsed.value if parsed else None)

    def search_tasks(self, keyword: Optional[str]) -> List[Task]:
        if keyword is None or not keyword.strip():
            return self.store.list_tasks()
        results = self.store.search_tasks(keyword.strip())
        logger.info("Found %d tasks matching '%s'", len(results), keyword)
        return results

    def update_task(self, task_id: int, request: TaskUpdate, actor: User) -> Task:
        """
        Managers may change any field. The assignee may change only the
        status; anything else in the request is refused.
        """
        task = self.get_task(task_id)
        requested = request.model_dump(exclude_none=True)
        if "assigned_to_id" in requested:
            self._require_user(requested["assigned_to_id"])
        policy.ensure_can_update_task(actor, task, requested.keys())

        changes = dict(requested)
        for field, enum_cls in (("status", TaskStatus), ("priority", Priority)):
            if field in changes:
                # Unknown values leave the field untouched
                parsed = parse_enum_or_default(enum_cls, changes.pop(field), None)
                if parsed is not None:
                    changes[field] = parsed.value
        if "status" in changes:
            if changes["status"] == TaskStatus.COMPLETED.value:
                if task.status != TaskStatus.COMPLETED:
                    changes["completed_date"] = self.today()
            else:
                changes["completed_date"] = None
        if not changes:
            return task

        with self.store.atomic():
            task = self.store.update_task(task_id, **changes)
            self.activities.log_activity(
                actor.id, "TASK_UPDATED", ENTITY_TYPE, task_id,
                f"Updated {', '.join(sorted(requested))} on task: {task.title}",
            )
        return task

    def complete_task(self, task_id: int, actor: User) -> Task:
        task = self.get_task(task_id)
        policy.ensure_can_complete_task(actor, task)
        with self.store.atomic():
            task = self.store.update_task(
                task_id, status=TaskStatus.COMPLETED.value, completed_date=self.today()
            )
            self.activities.log_activity(actor.id, "TASK_COMPLETED", ENTITY_TYPE, task_id, f"Completed task: {task.title}")
        logger.info("Task %s completed by %s", task_id, actor.email)
        return task

    def delete_task(self, task_id: int, actor: User) -> None:
        task = self.get_task(task_id)
        policy.require_manager(actor, "delete tasks")
        with self.store.atomic():
            self.store.delete_task(task_id)
            self.activities.log_activity(actor.id, "TASK_DELETED", ENTITY_TYPE, task_id, f"Deleted task: {task.title}")
        logger.info("Task deleted: %s - %s", task_id, task.title)
