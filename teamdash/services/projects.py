# teamdash/services/projects.py
from decimal import Decimal
from typing import List
import logging

from teamdash.core.enums import GroupType, ProjectMemberRole, ProjectStatus, parse_enum_or_default
from teamdash.core.errors import BadRequestError, NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.project import (
    AddMemberRequest, Financials, Project, ProjectCreate, ProjectMember, ProjectUpdate,
)
from teamdash.schemas.user import User
from teamdash.services import policy

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class ProjectService:

    def __init__(self, store: Store):
        self.store = store

    def _get(self, project_id: int) -> Project:
        project = self.store.get_project(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    def list_projects(self, actor: User) -> List[Project]:
        """Managers see every project, everyone else only the ones they belong to."""
        if policy.is_manager(actor):
            return self.store.list_projects()
        return self.store.list_projects_for_member(actor.id)

    def get_project(self, project_id: int, actor: User) -> Project:
        project = self._get(project_id)
        policy.ensure_can_view_project(actor, project, self.store.is_project_member(project_id, actor.id))
        return project

    def create_project(self, request: ProjectCreate, actor: User) -> Project:
        """
        Create the project, its chat group, the owner membership for the
        creating manager and a MEMBER row for every known member id, all in
        one unit of work. Unknown member ids are skipped.
        """
        policy.require_manager(actor, "create projects")
        status = parse_enum_or_default(ProjectStatus, request.status, ProjectStatus.PLANNING)
        with self.store.atomic():
            project = self.store.add_project(
                name=request.name, description=request.description, status=status.value,
                start_date=request.start_date, end_date=request.end_date,
                budget=request.budget if request.budget is not None else ZERO,
                revenue=request.revenue if request.revenue is not None else ZERO,
                expenses=request.expenses if request.expenses is not None else ZERO,
                manager_id=actor.id,
            )
            self.store.add_group(f"{project.name} Group", GroupType.PROJECT_TEAM.value, project.id)
            self.store.add_member(project.id, actor.id, ProjectMemberRole.OWNER.value)
            added = {actor.id}
            for member_id in request.member_ids:
                if member_id in added:
                    continue
                if self.store.get_user(member_id) is None:
                    logger.info("Skipping unknown member id %s for project %s", member_id, project.id)
                    continue
                self.store.add_member(project.id, member_id, ProjectMemberRole.MEMBER.value)
                added.add(member_id)
        logger.info("Project %s created by %s with %d members", project.id, actor.email, len(added))
        return project

    def update_project(self, project_id: int, request: ProjectUpdate, actor: User) -> Project:
        project = self._get(project_id)
        policy.require_manager(actor, "update projects")
        changes = request.model_dump(exclude_none=True)
        if "status" in changes:
            # Unknown status keeps the current one
            status = parse_enum_or_default(ProjectStatus, changes.pop("status"), None)
            if status is not None:
                changes["status"] = status.value
        if not changes:
            return project
        with self.store.atomic():
            project = self.store.update_project(project_id, **changes)
        return project

    def update_financials(self, project_id: int, financials: Financials, actor: User) -> Project:
        self._get(project_id)
        policy.require_manager(actor, "update project financials")
        changes = financials.model_dump(exclude_none=True)
        with self.store.atomic():
            project = self.store.update_project(project_id, **changes)
        return project

    def delete_project(self, project_id: int, actor: User) -> None:
        self._get(project_id)
        policy.require_manager(actor, "delete projects")
        with self.store.atomic():
            self.store.delete_project(project_id)
        logger.info("Project %s deleted by %s", project_id, actor.email)

    def list_members(self, project_id: int, actor: User) -> List[ProjectMember]:
        self.get_project(project_id, actor)
        return self.store.list_members(project_id)

    def add_member(self, project_id: int, request: AddMemberRequest, actor: User) -> ProjectMember:
        self._get(project_id)
        if self.store.get_user(request.user_id) is None:
            raise NotFoundError(f"User not found: {request.user_id}")
        policy.require_manager(actor, "add project members")
        if self.store.is_project_member(project_id, request.user_id):
            raise BadRequestError("User is already a member of this project")
        role = parse_enum_or_default(ProjectMemberRole, request.role, ProjectMemberRole.MEMBER)
        with self.store.atomic():
            member = self.store.add_member(project_id, request.user_id, role.value)
        logger.info("User %s added to project %s as %s", request.user_id, project_id, role.value)
        return member

    def remove_member(self, project_id: int, user_id: int, actor: User) -> None:
        if not self.store.is_project_member(project_id, user_id):
            raise NotFoundError("Member not found in project")
        policy.require_manager(actor, "remove project members")
        with self.store.atomic():
            self.store.remove_member(project_id, user_id)
        logger.info("User %s removed from project %s", user_id, project_id)

    def is_member(self, project_id: int, user_id: int) -> bool:
        return self.store.is_project_member(project_id, user_id)

