"""
Tests for the store's unit of work and its constraints.
"""

import pytest

from teamdash.core.enums import Priority, ProjectStatus, TaskStatus
from teamdash.core.errors import BadRequestError
from teamdash.db import models


class TestConstraints:
    """Unique constraints surface as BadRequestError."""

    def test_duplicate_membership(self, store, manager, employee):
        with store.atomic():
            project = store.add_project(name="Apollo", status=ProjectStatus.PLANNING.value, manager_id=manager.id)
            store.add_member(project.id, employee.id, "MEMBER")
        with pytest.raises(BadRequestError, match="already a member"):
            with store.atomic():
                store.add_member(project.id, employee.id, "MEMBER")
        assert len(store.list_members(project.id)) == 1

    def test_duplicate_email(self, store, employee):
        with pytest.raises(BadRequestError):
            with store.atomic():
                store.add_user(name="Copy", email=employee.email, hashed_password="x", role="EMPLOYEE")


class TestAtomic:
    """Nothing from a failed block is kept."""

    def test_rollback_on_error(self, store, db, manager):
        with pytest.raises(RuntimeError):
            with store.atomic():
                store.add_project(name="Doomed", status=ProjectStatus.PLANNING.value, manager_id=manager.id)
                raise RuntimeError("boom")
        assert db.query(models.Project).count() == 0


class TestTaskDeletion:
    """Deleting a task keeps its logged time."""

    def test_time_entries_detached(self, store, clock, employee):
        with store.atomic():
            task = store.add_task(title="Spike", status=TaskStatus.PENDING.value,
                                  priority=Priority.LOW.value, assigned_to_id=employee.id)
            entry = store.add_time_entry(user_id=employee.id, task_id=task.id, start_time=clock.now,
                                         end_time=clock.now, duration_minutes=0, is_manual=True)
        with store.atomic():
            store.delete_task(task.id)
        store.db.expire_all()
        kept = store.get_time_entry(entry.id)
        assert kept is not None
        assert kept.task_id is None
        assert kept.task_title is None
