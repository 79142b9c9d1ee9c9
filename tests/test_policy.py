"""
Tests for the access rules in teamdash.services.policy.
"""

from datetime import datetime

import pytest

from teamdash.core.enums import Priority, ProjectStatus, Role, TaskStatus
from teamdash.core.errors import ForbiddenError
from teamdash.schemas.project import Project
from teamdash.schemas.task import Task
from teamdash.schemas.time_entry import TimeEntry
from teamdash.schemas.user import User, UserRef
from teamdash.services import policy

MANAGER = User(id=1, name="Maya", email="maya@acme.io", role=Role.MANAGER)
EMPLOYEE = User(id=2, name="Eli", email="eli@acme.io", role=Role.EMPLOYEE)
OTHER = User(id=3, name="Noor", email="noor@acme.io", role=Role.EMPLOYEE)


def ref(user):
    return UserRef(id=user.id, name=user.name, email=user.email)


@pytest.fixture
def task():
    return Task(id=10, title="Write report", status=TaskStatus.PENDING,
                priority=Priority.MEDIUM, assigned_to=ref(EMPLOYEE))


@pytest.fixture
def project():
    return Project(id=5, name="Apollo", status=ProjectStatus.PLANNING, manager=ref(MANAGER))


class TestTaskUpdates:
    """Tests for ensure_can_update_task()."""

    def test_manager_may_change_anything(self, task):
        policy.ensure_can_update_task(MANAGER, task, {"title", "priority", "assigned_to_id"})

    def test_assignee_may_change_status(self, task):
        policy.ensure_can_update_task(EMPLOYEE, task, {"status"})

    def test_assignee_may_not_change_title(self, task):
        with pytest.raises(ForbiddenError, match="Employees can only update task status"):
            policy.ensure_can_update_task(EMPLOYEE, task, {"status", "title"})

    def test_other_employee_refused(self, task):
        with pytest.raises(ForbiddenError, match="your own tasks"):
            policy.ensure_can_update_task(OTHER, task, {"status"})


class TestRequireManager:
    """Tests for require_manager()."""

    def test_manager_passes(self):
        policy.require_manager(MANAGER, "create tasks")

    def test_employee_refused(self):
        with pytest.raises(ForbiddenError, match="create tasks"):
            policy.require_manager(EMPLOYEE, "create tasks")


class TestTimeEntries:
    """Tests for ensure_can_delete_time_entry()."""

    def entry(self, owner):
        return TimeEntry(id=7, user_id=owner.id, user_name=owner.name,
                         start_time=datetime(2024, 3, 1, 9), is_running=True)

    def test_owner_may_delete(self):
        policy.ensure_can_delete_time_entry(EMPLOYEE, self.entry(EMPLOYEE))

    def test_manager_may_delete_any(self):
        policy.ensure_can_delete_time_entry(MANAGER, self.entry(EMPLOYEE))

    def test_other_employee_refused(self):
        with pytest.raises(ForbiddenError):
            policy.ensure_can_delete_time_entry(OTHER, self.entry(EMPLOYEE))


class TestUserData:
    """Tests for ensure_can_view_user_data()."""

    def test_self_and_manager(self):
        policy.ensure_can_view_user_data(EMPLOYEE, EMPLOYEE.id)
        policy.ensure_can_view_user_data(MANAGER, EMPLOYEE.id)

    def test_other_employee_refused(self):
        with pytest.raises(ForbiddenError):
            policy.ensure_can_view_user_data(OTHER, EMPLOYEE.id)


class TestProjectVisibility:
    """Tests for project and chat group access."""

    def test_manager_sees_every_project(self, project):
        assert policy.can_view_project(MANAGER, project, is_member=False)

    def test_member_sees_project(self, project):
        assert policy.can_view_project(EMPLOYEE, project, is_member=True)

    def test_non_member_refused(self, project):
        with pytest.raises(ForbiddenError):
            policy.ensure_can_view_project(OTHER, project, is_member=False)

    def test_group_open_without_project(self):
        assert policy.can_access_group(OTHER, None, is_member=False)

    def test_group_requires_membership(self, project):
        assert policy.can_access_group(EMPLOYEE, project, is_member=True)
        assert not policy.can_access_group(OTHER, project, is_member=False)

    def test_project_manager_reaches_group(self, project):
        assert policy.can_access_group(MANAGER, project, is_member=False)

    def test_other_manager_needs_membership(self, project):
        outsider = User(id=9, name="Ola", email="ola@acme.io", role=Role.MANAGER)
        with pytest.raises(ForbiddenError, match="not a member"):
            policy.ensure_can_access_group(outsider, project, is_member=False)
