# teamdash/db/store.py
# Entity store: the only place that talks to SQLAlchemy. Every read returns
# fully-loaded pydantic records, never live ORM objects.
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, List, Optional, Sequence, Tuple
import logging

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from teamdash.core.enums import LeaveStatus
from teamdash.core.errors import BadRequestError
from teamdash.db import models
from teamdash.schemas import activity as activity_schema
from teamdash.schemas import chat as chat_schema
from teamdash.schemas import leave as leave_schema
from teamdash.schemas import project as project_schema
from teamdash.schemas import task as task_schema
from teamdash.schemas import time_entry as time_schema
from teamdash.schemas import user as user_schema

logger = logging.getLogger(__name__)


def _member_record(row: models.ProjectMember) -> project_schema.ProjectMember:
    return project_schema.ProjectMember(
        id=row.id, project_id=row.project_id, user_id=row.user_id,
        user_name=row.user.name, user_email=row.user.email,
        role=row.role, joined_at=row.joined_at,
    )


def _time_entry_record(row: models.TimeEntry) -> time_schema.TimeEntry:
    return time_schema.TimeEntry(
        id=row.id, user_id=row.user_id, user_name=row.user.name,
        task_id=row.task_id, task_title=row.task.title if row.task else None,
        start_time=row.start_time, end_time=row.end_time,
        duration_minutes=row.duration_minutes, description=row.description,
        is_manual=bool(row.is_manual), is_running=row.end_time is None,
    )


def _activity_record(row: models.Activity) -> activity_schema.Activity:
    return activity_schema.Activity(
        id=row.id, user_id=row.user_id, user_name=row.user.name, user_email=row.user.email,
        action=row.action, entity_type=row.entity_type, entity_id=row.entity_id,
        details=row.details, created_at=row.created_at,
    )


class Store:
    """Unit of work over one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def atomic(self) -> Iterator["Store"]:
        """All-or-nothing block: commit on success, roll back on any error."""
        try:
            yield self
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _flush(self, conflict_message: str) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Constraint violation: %s (%s)", conflict_message, exc.orig)
            raise BadRequestError(conflict_message) from exc

    # --- Users ---

    def get_user(self, user_id: int) -> Optional[user_schema.User]:
        row = self.db.get(models.User, user_id)
        return user_schema.User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[user_schema.User]:
        row = self.db.query(models.User).filter(models.User.email == email).first()
        return user_schema.User.model_validate(row) if row else None

    def get_credentials(self, email: str) -> Optional[Tuple[user_schema.User, str]]:
        row = self.db.query(models.User).filter(models.User.email == email).first()
        if row is None:
            return None
        return user_schema.User.model_validate(row), row.hashed_password

    def get_password_hash(self, user_id: int) -> Optional[str]:
        row = self.db.get(models.User, user_id)
        return row.hashed_password if row else None

    def email_exists(self, email: str) -> bool:
        return self.db.query(models.User.id).filter(models.User.email == email).first() is not None

    def add_user(self, name: str, email: str, hashed_password: str, role: str) -> user_schema.User:
        row = models.User(name=name, email=email, hashed_password=hashed_password, role=role)
        self.db.add(row)
        self._flush("Email is already in use")
        return user_schema.User.model_validate(row)

    def set_password(self, user_id: int, hashed_password: str) -> None:
        row = self.db.get(models.User, user_id)
        row.hashed_password = hashed_password
        self.db.flush()

    def list_users(self) -> List[user_schema.User]:
        rows = self.db.query(models.User).order_by(models.User.id).all()
        return [user_schema.User.model_validate(row) for row in rows]

    # --- Tasks ---

    def _task_query(self):
        return self.db.query(models.Task).options(joinedload(models.Task.assigned_to))

    def get_task(self, task_id: int) -> Optional[task_schema.Task]:
        row = self._task_query().filter(models.Task.id == task_id).first()
        return task_schema.Task.model_validate(row) if row else None

    def list_tasks(self, assigned_to_id: Optional[int] = None, status: Optional[str] = None) -> List[task_schema.Task]:
        query = self._task_query()
        if assigned_to_id is not None:
            query = query.filter(models.Task.assigned_to_id == assigned_to_id)
        if status is not None:
            query = query.filter(models.Task.status == status)
        return [task_schema.Task.model_validate(row) for row in query.order_by(models.Task.id).all()]

    def search_tasks(self, keyword: str) -> List[task_schema.Task]:
        pattern = f"%{keyword.lower()}%"
        rows = self._task_query().filter(or_(
            func.lower(models.Task.title).like(pattern),
            func.lower(models.Task.description).like(pattern),
        )).order_by(models.Task.id).all()
        return [task_schema.Task.model_validate(row) for row in rows]

    def add_task(self, **fields) -> task_schema.Task:
        row = models.Task(**fields)
        self.db.add(row)
        self.db.flush()
        return self.get_task(row.id)

    def update_task(self, task_id: int, **fields) -> task_schema.Task:
        row = self.db.get(models.Task, task_id)
        for field, value in fields.items():
            setattr(row, field, value)
        self.db.flush()
        self.db.refresh(row)
        return self.get_task(task_id)

    def delete_task(self, task_id: int) -> None:
        # Keep logged time, detach it from the task
        self.db.query(models.TimeEntry).filter(models.TimeEntry.task_id == task_id).update(
            {models.TimeEntry.task_id: None}, synchronize_session=False
        )
        self.db.delete(self.db.get(models.Task, task_id))
        self.db.flush()

    # --- Projects and membership ---

    def _project_query(self):
        return self.db.query(models.Project).options(joinedload(models.Project.manager))

    def get_project(self, project_id: int) -> Optional[project_schema.Project]:
        row = self._project_query().filter(models.Project.id == project_id).first()
        return project_schema.Project.model_validate(row) if row else None

    def list_projects(self) -> List[project_schema.Project]:
        rows = self._project_query().order_by(models.Project.id).all()
        return [project_schema.Project.model_validate(row) for row in rows]

    def list_projects_for_member(self, user_id: int) -> List[project_schema.Project]:
        rows = (
            self._project_query()
            .join(models.ProjectMember, models.ProjectMember.project_id == models.Project.id)
            .filter(models.ProjectMember.user_id == user_id)
            .order_by(models.Project.id)
            .all()
        )
        return [project_schema.Project.model_validate(row) for row in rows]

    def add_project(self, **fields) -> project_schema.Project:
        row = models.Project(**fields)
        self.db.add(row)
        self.db.flush()
        return self.get_project(row.id)

    def update_project(self, project_id: int, **fields) -> project_schema.Project:
        row = self.db.get(models.Project, project_id)
        for field, value in fields.items():
            setattr(row, field, value)
        self.db.flush()
        self.db.refresh(row)
        return self.get_project(project_id)

    def delete_project(self, project_id: int) -> None:
        # ORM cascade removes members, the project group and its messages
        self.db.delete(self.db.get(models.Project, project_id))
        self.db.flush()

    def list_members(self, project_id: int) -> List[project_schema.ProjectMember]:
        rows = (
            self.db.query(models.ProjectMember)
            .options(joinedload(models.ProjectMember.user))
            .filter(models.ProjectMember.project_id == project_id)
            .order_by(models.ProjectMember.id)
            .all()
        )
        return [_member_record(row) for row in rows]

    def is_project_member(self, project_id: int, user_id: int) -> bool:
        return self.db.query(models.ProjectMember.id).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id,
        ).first() is not None

    def add_member(self, project_id: int, user_id: int, role: str) -> project_schema.ProjectMember:
        row = models.ProjectMember(project_id=project_id, user_id=user_id, role=role)
        self.db.add(row)
        self._flush("User is already a member of this project")
        self.db.refresh(row)
        return _member_record(row)

    def remove_member(self, project_id: int, user_id: int) -> bool:
        row = self.db.query(models.ProjectMember).filter(
            models.ProjectMember.project_id == project_id,
            models.ProjectMember.user_id == user_id,
        ).first()
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    # --- Groups and messages ---

    def add_group(self, name: str, type: str, project_id: Optional[int] = None) -> chat_schema.Group:
        row = models.Group(name=name, type=type, project_id=project_id)
        self.db.add(row)
        self._flush("Project already has a group")
        return chat_schema.Group.model_validate(row)

    def get_group(self, group_id: int) -> Optional[chat_schema.Group]:
        row = self.db.get(models.Group, group_id)
        return chat_schema.Group.model_validate(row) if row else None

    def get_group_by_project(self, project_id: int) -> Optional[chat_schema.Group]:
        row = self.db.query(models.Group).filter(models.Group.project_id == project_id).first()
        return chat_schema.Group.model_validate(row) if row else None

    def _message_query(self, group_id: int):
        return (
            self.db.query(models.Message)
            .options(joinedload(models.Message.sender))
            .filter(models.Message.group_id == group_id)
        )

    def add_message(self, group_id: int, sender_id: int, content: str, created_at: datetime) -> chat_schema.Message:
        row = models.Message(group_id=group_id, sender_id=sender_id, content=content, created_at=created_at)
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return chat_schema.Message.model_validate(row)

    def list_messages(self, group_id: int) -> List[chat_schema.Message]:
        rows = self._message_query(group_id).order_by(models.Message.created_at.asc(), models.Message.id.asc()).all()
        return [chat_schema.Message.model_validate(row) for row in rows]

    def latest_messages(self, group_id: int, limit: int) -> List[chat_schema.Message]:
        rows = (
            self._message_query(group_id)
            .order_by(models.Message.created_at.desc(), models.Message.id.desc())
            .limit(limit)
            .all()
        )
        return [chat_schema.Message.model_validate(row) for row in rows]

    # --- Time entries ---

    def _time_query(self):
        return self.db.query(models.TimeEntry).options(
            joinedload(models.TimeEntry.user), joinedload(models.TimeEntry.task)
        )

    def get_time_entry(self, entry_id: int) -> Optional[time_schema.TimeEntry]:
        row = self._time_query().filter(models.TimeEntry.id == entry_id).first()
        return _time_entry_record(row) if row else None

    def get_running_entry(self, user_id: int) -> Optional[time_schema.TimeEntry]:
        row = self._time_query().filter(
            models.TimeEntry.user_id == user_id, models.TimeEntry.end_time.is_(None)
        ).first()
        return _time_entry_record(row) if row else None

    def add_time_entry(self, **fields) -> time_schema.TimeEntry:
        row = models.TimeEntry(**fields)
        self.db.add(row)
        # The partial unique index rejects a second open entry for the same user
        self._flush("You already have a running timer. Please stop it first.")
        return self.get_time_entry(row.id)

    def close_time_entry(self, entry_id: int, end_time: datetime, duration_minutes: int) -> time_schema.TimeEntry:
        row = self.db.get(models.TimeEntry, entry_id)
        row.end_time = end_time
        row.duration_minutes = duration_minutes
        self.db.flush()
        return self.get_time_entry(entry_id)

    def delete_time_entry(self, entry_id: int) -> None:
        self.db.delete(self.db.get(models.TimeEntry, entry_id))
        self.db.flush()

    def list_user_entries(self, user_id: int, start: datetime, end: datetime) -> List[time_schema.TimeEntry]:
        return self.list_team_entries([user_id], start, end)

    def list_team_entries(self, user_ids: Sequence[int], start: datetime, end: datetime) -> List[time_schema.TimeEntry]:
        rows = self._time_query().filter(
            models.TimeEntry.user_id.in_(list(user_ids)),
            models.TimeEntry.start_time >= start,
            models.TimeEntry.start_time <= end,
        ).order_by(models.TimeEntry.start_time.desc()).all()
        return [_time_entry_record(row) for row in rows]

    def total_minutes(self, user_id: int, start: datetime, end: datetime) -> int:
        total = self.db.query(func.sum(models.TimeEntry.duration_minutes)).filter(
            models.TimeEntry.user_id == user_id,
            models.TimeEntry.start_time >= start,
            models.TimeEntry.start_time <= end,
        ).scalar()
        return int(total or 0)

    def list_task_entries(self, task_id: int) -> List[time_schema.TimeEntry]:
        rows = self._time_query().filter(models.TimeEntry.task_id == task_id).order_by(
            models.TimeEntry.start_time.desc()
        ).all()
        return [_time_entry_record(row) for row in rows]

    # --- Activities ---

    def _activity_query(self):
        return self.db.query(models.Activity).options(joinedload(models.Activity.user))

    def add_activity(self, **fields) -> activity_schema.Activity:
        row = models.Activity(**fields)
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _activity_record(row)

    def page_activities(
        self, offset: int, limit: int, user_ids: Optional[Sequence[int]] = None
    ) -> Tuple[List[activity_schema.Activity], int]:
        query = self.db.query(models.Activity)
        if user_ids is not None:
            query = query.filter(models.Activity.user_id.in_(list(user_ids)))
        total = query.count()
        rows = (
            query.options(joinedload(models.Activity.user))
            .order_by(models.Activity.created_at.desc(), models.Activity.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [_activity_record(row) for row in rows], total

    def activities_in_range(self, user_id: int, start: datetime, end: datetime) -> List[activity_schema.Activity]:
        rows = self._activity_query().filter(
            models.Activity.user_id == user_id,
            models.Activity.created_at >= start,
            models.Activity.created_at <= end,
        ).order_by(models.Activity.created_at.desc(), models.Activity.id.desc()).all()
        return [_activity_record(row) for row in rows]

    def count_activities_since(self, user_id: int, since: datetime) -> int:
        return self.db.query(models.Activity).filter(
            models.Activity.user_id == user_id, models.Activity.created_at >= since
        ).count()

    def recent_activities(self, since: datetime, limit: int) -> List[activity_schema.Activity]:
        rows = self._activity_query().filter(models.Activity.created_at >= since).order_by(
            models.Activity.created_at.desc(), models.Activity.id.desc()
        ).limit(limit).all()
        return [_activity_record(row) for row in rows]

    # --- Leave and attendance ---

    def add_leave(self, **fields) -> leave_schema.LeaveRequest:
        row = models.LeaveRequest(**fields)
        self.db.add(row)
        self.db.flush()
        return leave_schema.LeaveRequest.model_validate(row)

    def get_leave(self, leave_id: int) -> Optional[leave_schema.LeaveRequest]:
        row = self.db.get(models.LeaveRequest, leave_id)
        return leave_schema.LeaveRequest.model_validate(row) if row else None

    def list_leaves(self, user_id: Optional[int] = None, status: Optional[str] = None) -> List[leave_schema.LeaveRequest]:
        query = self.db.query(models.LeaveRequest)
        if user_id is not None:
            query = query.filter(models.LeaveRequest.user_id == user_id)
        if status is not None:
            query = query.filter(models.LeaveRequest.status == status)
        rows = query.order_by(models.LeaveRequest.created_at.desc(), models.LeaveRequest.id.desc()).all()
        return [leave_schema.LeaveRequest.model_validate(row) for row in rows]

    def has_overlapping_leave(self, user_id: int, start: date, end: date) -> bool:
        return self.db.query(models.LeaveRequest.id).filter(
            models.LeaveRequest.user_id == user_id,
            models.LeaveRequest.start_date <= end,
            models.LeaveRequest.end_date >= start,
            models.LeaveRequest.status.in_([LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value]),
        ).first() is not None

    def set_leave_status(self, leave_id: int, status: str, reviewed_by_id: Optional[int] = None) -> leave_schema.LeaveRequest:
        row = self.db.get(models.LeaveRequest, leave_id)
        row.status = status
        if reviewed_by_id is not None:
            row.reviewed_by_id = reviewed_by_id
        self.db.flush()
        return leave_schema.LeaveRequest.model_validate(row)

    def upsert_attendance(self, user_id: int, work_date: date, status: str,
                          work_hours: Optional[float]) -> leave_schema.Attendance:
        row = self.db.query(models.Attendance).filter(
            models.Attendance.user_id == user_id, models.Attendance.work_date == work_date
        ).first()
        if row is None:
            row = models.Attendance(user_id=user_id, work_date=work_date)
            self.db.add(row)
        row.status = status
        row.work_hours = work_hours
        self.db.flush()
        return leave_schema.Attendance.model_validate(row)

    def list_attendance(self, user_id: int, start: date, end: date) -> List[leave_schema.Attendance]:
        rows = self.db.query(models.Attendance).filter(
            models.Attendance.user_id == user_id,
            models.Attendance.work_date >= start,
            models.Attendance.work_date <= end,
        ).order_by(models.Attendance.work_date.desc()).all()
        return [leave_schema.Attendance.model_validate(row) for row in rows]
