# teamdash/schemas/dashboard.py
from pydantic import BaseModel
from typing import Dict, List


class UserTaskStats(BaseModel):
    user_id: int
    user_name: str
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    in_progress_tasks: int = 0
    completion_rate: float = 0.0


class ProductivityScore(BaseModel):
    user_id: int
    user_name: str
    score: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0


class DashboardSummary(BaseModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    on_time_completion_percent: float
    productivity_scores: List[ProductivityScore]


class EnhancedDashboardSummary(BaseModel):
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    in_progress_tasks: int
    on_time_completion_percent: float
    overdue_tasks: int
    high_priority_tasks: int
    productivity_scores: Dict[str, float]
    user_stats: List[UserTaskStats]
