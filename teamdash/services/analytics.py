# teamdash/services/analytics.py
"""
Dashboard metrics computed from a snapshot of tasks.

All functions are pure: the same tasks and the same ``today`` always give
the same numbers. Percentages are 0 when there is nothing to divide by.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Sequence

from teamdash.core.enums import Priority, TaskStatus
from teamdash.schemas.dashboard import (
    DashboardSummary, EnhancedDashboardSummary, ProductivityScore, UserTaskStats,
)
from teamdash.schemas.task import Task
from teamdash.schemas.user import User


def percent(part: int, whole: int) -> float:
    return part / whole * 100.0 if whole > 0 else 0.0


def count_by_status(tasks: Iterable[Task]) -> Dict[TaskStatus, int]:
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    return counts


def is_completed_on_time(task: Task) -> bool:
    return (
        task.status == TaskStatus.COMPLETED
        and task.completed_date is not None
        and task.due_date is not None
        and task.completed_date <= task.due_date
    )


def is_overdue(task: Task, today: date) -> bool:
    return task.status != TaskStatus.COMPLETED and task.due_date is not None and task.due_date < today


def on_time_completion_percent(tasks: Sequence[Task]) -> float:
    completed = sum(1 for task in tasks if task.status == TaskStatus.COMPLETED)
    on_time = sum(1 for task in tasks if is_completed_on_time(task))
    return percent(on_time, completed)


def overdue_count(tasks: Iterable[Task], today: date) -> int:
    return sum(1 for task in tasks if is_overdue(task, today))


def high_priority_open_count(tasks: Iterable[Task]) -> int:
    return sum(1 for task in tasks if task.priority == Priority.HIGH and task.status != TaskStatus.COMPLETED)


def group_by_assignee(tasks: Iterable[Task]) -> Dict[int, List[Task]]:
    grouped = defaultdict(list)
    for task in tasks:
        grouped[task.assigned_to.id].append(task)
    return grouped


def user_task_stats(user: User, tasks: Sequence[Task]) -> UserTaskStats:
    """Stats for one user; ``tasks`` may contain other users' tasks."""
    own = [task for task in tasks if task.assigned_to.id == user.id]
    counts = count_by_status(own)
    completed = counts[TaskStatus.COMPLETED]
    return UserTaskStats(
        user_id=user.id,
        user_name=user.name,
        total_tasks=len(own),
        completed_tasks=completed,
        pending_tasks=counts[TaskStatus.PENDING],
        in_progress_tasks=counts[TaskStatus.IN_PROGRESS],
        completion_rate=percent(completed, len(own)),
    )


def productivity_scores(users: Sequence[User], tasks: Sequence[Task]) -> List[ProductivityScore]:
    by_user = group_by_assignee(tasks)
    scores = []
    for user in users:
        stats = user_task_stats(user, by_user.get(user.id, []))
        scores.append(ProductivityScore(
            user_id=user.id,
            user_name=user.name,
            score=stats.completion_rate,
            total_tasks=stats.total_tasks,
            completed_tasks=stats.completed_tasks,
        ))
    return scores


def build_summary(users: Sequence[User], tasks: Sequence[Task]) -> DashboardSummary:
    counts = count_by_status(tasks)
    return DashboardSummary(
        total_tasks=len(tasks),
        completed_tasks=counts[TaskStatus.COMPLETED],
        pending_tasks=counts[TaskStatus.PENDING],
        on_time_completion_percent=on_time_completion_percent(tasks),
        productivity_scores=productivity_scores(users, tasks),
    )


def build_enhanced_summary(users: Sequence[User], tasks: Sequence[Task], today: date) -> EnhancedDashboardSummary:
    counts = count_by_status(tasks)
    by_user = group_by_assignee(tasks)
    user_stats = [user_task_stats(user, by_user.get(user.id, [])) for user in users]
    return EnhancedDashboardSummary(
        total_tasks=len(tasks),
        completed_tasks=counts[TaskStatus.COMPLETED],
        pending_tasks=counts[TaskStatus.PENDING],
        in_progress_tasks=counts[TaskStatus.IN_PROGRESS],
        on_time_completion_percent=on_time_completion_percent(tasks),
        overdue_tasks=overdue_count(tasks, today),
        high_priority_tasks=high_priority_open_count(tasks),
        # Keyed by display name; duplicate names keep the last user's score
        productivity_scores={stats.user_name: stats.completion_rate for stats in user_stats},
        user_stats=user_stats,
    )
