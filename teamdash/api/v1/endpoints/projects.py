# teamdash/api/v1/endpoints/projects.py
from fastapi import APIRouter, Depends, status
from typing import List

from teamdash.api import deps
from teamdash.core import security
from teamdash.schemas import project as project_schema
from teamdash.schemas.user import User
from teamdash.services.projects import ProjectService

router = APIRouter()

@router.get("", response_model=List[project_schema.Project])
def list_projects(
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    """ Managers see all projects, employees only those they are members of. """
    return projects.list_projects(current_user)

@router.post("", response_model=project_schema.Project, status_code=status.HTTP_201_CREATED)
def create_project(
    project_in: project_schema.ProjectCreate,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.create_project(project_in, current_user)

@router.get("/{project_id}", response_model=project_schema.Project)
def get_project(
    project_id: int,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.get_project(project_id, current_user)

@router.put("/{project_id}", response_model=project_schema.Project)
def update_project(
    project_id: int,
    updates: project_schema.ProjectUpdate,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.update_project(project_id, updates, current_user)

@router.patch("/{project_id}/financials", response_model=project_schema.Project)
def update_financials(
    project_id: int,
    financials: project_schema.Financials,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.update_financials(project_id, financials, current_user)

@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: int,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    projects.delete_project(project_id, current_user)
    return

@router.get("/{project_id}/members", response_model=List[project_schema.ProjectMember])
def list_members(
    project_id: int,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.list_members(project_id, current_user)

@router.post("/{project_id}/members", response_model=project_schema.ProjectMember, status_code=status.HTTP_201_CREATED)
def add_member(
    project_id: int,
    member_in: project_schema.AddMemberRequest,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.add_member(project_id, member_in, current_user)

@router.delete("/{project_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(
    project_id: int,
    user_id: int,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    projects.remove_member(project_id, user_id, current_user)
    return

@router.get("/{project_id}/members/{user_id}/check", response_model=bool)
def check_membership(
    project_id: int,
    user_id: int,
    projects: ProjectService = Depends(deps.get_project_service),
    current_user: User = Depends(security.get_current_user)
):
    return projects.is_member(project_id, user_id)
