# teamdash/services/policy.py
"""
Access rules for tasks, projects, time entries and chat groups.

Every check works on already-resolved records and either returns normally
or raises ForbiddenError. Callers resolve ids (and raise NotFoundError)
before asking the policy anything.
"""
from typing import Iterable, Optional
import logging

from teamdash.core.enums import Role
from teamdash.core.errors import ForbiddenError
from teamdash.schemas.project import Project
from teamdash.schemas.task import Task
from teamdash.schemas.time_entry import TimeEntry
from teamdash.schemas.user import User

logger = logging.getLogger(__name__)

# Fields an employee may change on a task assigned to them
EMPLOYEE_TASK_FIELDS = frozenset({"status"})


def is_manager(user: User) -> bool:
    return user.role == Role.MANAGER


def require_manager(user: User, action: str = "perform this action") -> None:
    if not is_manager(user):
        logger.warning("User %s (%s) denied: requires manager role to %s", user.id, user.role.value, action)
        raise ForbiddenError(f"Requires manager role to {action}")


def is_project_manager(user: User, project: Project) -> bool:
    return project.manager is not None and project.manager.id == user.id


def can_view_project(user: User, project: Project, is_member: bool) -> bool:
    return is_manager(user) or is_project_manager(user, project) or is_member


def ensure_can_view_project(user: User, project: Project, is_member: bool) -> None:
    if not can_view_project(user, project, is_member):
        logger.warning("User %s denied access to project %s", user.id, project.id)
        raise ForbiddenError("You don't have access to this project")


def ensure_can_update_task(user: User, task: Task, changed_fields: Iterable[str]) -> None:
    if is_manager(user):
        return
    if task.assigned_to.id != user.id:
        logger.warning("User %s tried to update task %s assigned to someone else", user.id, task.id)
        raise ForbiddenError("You can only update your own tasks")
    extra = set(changed_fields) - EMPLOYEE_TASK_FIELDS
    if extra:
        logger.warning("User %s tried to change %s on task %s", user.id, sorted(extra), task.id)
        raise ForbiddenError("Employees can only update task status")


def ensure_can_complete_task(user: User, task: Task) -> None:
    if not is_manager(user) and task.assigned_to.id != user.id:
        raise ForbiddenError("You can only complete your own tasks")


def ensure_can_delete_time_entry(user: User, entry: TimeEntry) -> None:
    if entry.user_id != user.id and not is_manager(user):
        logger.warning("User %s attempted to delete time entry %s they don't own", user.id, entry.id)
        raise ForbiddenError("You can only delete your own time entries")


def ensure_can_view_user_data(user: User, target_user_id: int) -> None:
    """Managers see everyone's activity and time; employees only their own."""
    if not is_manager(user) and user.id != target_user_id:
        raise ForbiddenError("You can only view your own records")


def can_access_group(user: User, project: Optional[Project], is_member: bool) -> bool:
    # Groups without a project are open to every authenticated user
    if project is None:
        return True
    return is_member or is_project_manager(user, project)


def ensure_can_access_group(user: User, project: Optional[Project], is_member: bool) -> None:
    if not can_access_group(user, project, is_member):
        logger.warning("User %s denied chat access to project %s", user.id, project.id)
        raise ForbiddenError("You are not a member of this project")
