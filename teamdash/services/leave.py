# teamdash/services/leave.py
# Leave requests and daily attendance. These sit beside the dashboard
# metrics and never feed into them.
from datetime import date
from typing import Callable, List, Optional
import logging

from teamdash.core.enums import AttendanceStatus, LeaveStatus, LeaveType, parse_enum_or_default
from teamdash.core.errors import BadRequestError, ForbiddenError, NotFoundError
from teamdash.db.store import Store
from teamdash.schemas.leave import Attendance, AttendanceMark, LeaveCreate, LeaveRequest
from teamdash.schemas.user import User
from teamdash.services import policy
from teamdash.services.activity import ActivityService

logger = logging.getLogger(__name__)

ENTITY_TYPE = "LeaveRequest"


class LeaveService:

    def __init__(self, store: Store, activities: ActivityService, today: Callable[[], date] = date.today):
        self.store = store
        self.activities = activities
        self.today = today

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self.store.get_leave(leave_id)
        if leave is None:
            raise NotFoundError(f"Leave request not found: {leave_id}")
        return leave

    def submit_leave(self, actor: User, request: LeaveCreate) -> LeaveRequest:
        if request.end_date < request.start_date:
            raise BadRequestError("End date cannot be before start date")
        if self.store.has_overlapping_leave(actor.id, request.start_date, request.end_date):
            raise BadRequestError("You already have a leave request covering these dates")
        leave_type = parse_enum_or_default(LeaveType, request.leave_type, LeaveType.CASUAL_LEAVE)
        with self.store.atomic():
            leave = self.store.add_leave(
                user_id=actor.id, leave_type=leave_type.value,
                start_date=request.start_date, end_date=request.end_date,
                days_count=(request.end_date - request.start_date).days + 1,
                reason=request.reason, status=LeaveStatus.PENDING.value,
            )
            self.activities.log_activity(
                actor.id, "LEAVE_REQUESTED", ENTITY_TYPE, leave.id,
                f"Requested {leave.days_count} day(s) of {leave_type.value}",
            )
        return leave

    def list_my_leaves(self, actor: User) -> List[LeaveRequest]:
        return self.store.list_leaves(user_id=actor.id)

    def list_leaves(self, actor: User, status: Optional[str] = None) -> List[LeaveRequest]:
        policy.require_manager(actor, "review leave requests")
        parsed = parse_enum_or_default(LeaveStatus, status, None)
        return self.store.list_leaves(status=parsed.value if parsed else None)

    def decide_leave(self, leave_id: int, approve: bool, actor: User) -> LeaveRequest:
        leave = self._get(leave_id)
        policy.require_manager(actor, "review leave requests")
        if leave.status != LeaveStatus.PENDING:
            raise BadRequestError(f"Leave request is already {leave.status.value}")
        status = LeaveStatus.APPROVED if approve else LeaveStatus.REJECTED
        with self.store.atomic():
            leave = self.store.set_leave_status(leave_id, status.value, reviewed_by_id=actor.id)
            self.activities.log_activity(actor.id, f"LEAVE_{status.value}", ENTITY_TYPE, leave_id)
        logger.info("Leave request %s %s by %s", leave_id, status.value.lower(), actor.email)
        return leave

    def cancel_leave(self, leave_id: int, actor: User) -> LeaveRequest:
        leave = self._get(leave_id)
        if leave.user_id != actor.id:
            raise ForbiddenError("You can only cancel your own leave requests")
        if leave.status != LeaveStatus.PENDING:
            raise BadRequestError("Only pending leave requests can be cancelled")
        with self.store.atomic():
            leave = self.store.set_leave_status(leave_id, LeaveStatus.CANCELLED.value)
            self.activities.log_activity(actor.id, "LEAVE_CANCELLED", ENTITY_TYPE, leave_id)
        return leave

    def mark_attendance(self, actor: User, request: AttendanceMark) -> Attendance:
        """One row per user and day; marking again overwrites it."""
        status = parse_enum_or_default(AttendanceStatus, request.status, AttendanceStatus.PRESENT)
        work_date = request.work_date or self.today()
        with self.store.atomic():
            record = self.store.upsert_attendance(actor.id, work_date, status.value, request.work_hours)
        return record

    def list_attendance(self, user_id: int, start: date, end: date, actor: User) -> List[Attendance]:
        if self.store.get_user(user_id) is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        policy.ensure_can_view_user_data(actor, user_id)
        return self.store.list_attendance(user_id, start, end)
