# teamdash/api/v1/endpoints/tasks.py
from fastapi import APIRouter, Depends, status
from typing import List, Optional

from teamdash.api import deps
from teamdash.core import security
from teamdash.schemas import task as task_schema
from teamdash.schemas.user import User
from teamdash.services.tasks import TaskService

router = APIRouter()

@router.post("", response_model=task_schema.Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: task_schema.TaskCreate,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Creates a task. Managers only. """
    return tasks.create_task(task_in, current_user)

@router.get("", response_model=List[task_schema.Task])
def list_tasks(
    assigned_to: Optional[int] = None,
    status: Optional[str] = None,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    return tasks.list_tasks(assigned_to_id=assigned_to, status=status)

@router.get("/search", response_model=List[task_schema.Task])
def search_tasks(
    keyword: str = "",
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    return tasks.search_tasks(keyword)

@router.get("/{task_id}", response_model=task_schema.Task)
def get_task(
    task_id: int,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    return tasks.get_task(task_id)

@router.put("/{task_id}", response_model=task_schema.Task)
def update_task(
    task_id: int,
    updates: task_schema.TaskUpdate,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Managers update any field; the assignee may only move the status. """
    return tasks.update_task(task_id, updates, current_user)

@router.put("/{task_id}/complete", response_model=task_schema.Task)
def complete_task(
    task_id: int,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    return tasks.complete_task(task_id, current_user)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    tasks: TaskService = Depends(deps.get_task_service),
    current_user: User = Depends(security.get_current_user)
):
    tasks.delete_task(task_id, current_user)
    return
