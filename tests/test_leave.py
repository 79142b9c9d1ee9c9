"""
Tests for leave requests and attendance.
"""

from datetime import date

import pytest

from teamdash.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from teamdash.core.errors import BadRequestError, ForbiddenError, NotFoundError
from teamdash.schemas.leave import AttendanceMark, LeaveCreate
from teamdash.services.activity import ActivityService
from teamdash.services.leave import LeaveService

TODAY = date(2024, 3, 11)


@pytest.fixture
def leaves(store, clock):
    return LeaveService(store, ActivityService(store, clock), today=lambda: TODAY)


def request(start, end, **kwargs):
    return LeaveCreate(start_date=start, end_date=end, **kwargs)


class TestSubmitLeave:
    """Tests for submit_leave()."""

    def test_inclusive_day_count(self, leaves, employee):
        leave = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 3), leave_type="sick_leave"))
        assert leave.days_count == 3
        assert leave.leave_type is LeaveType.SICK_LEAVE
        assert leave.status is LeaveStatus.PENDING

    def test_unknown_type_defaults_to_casual(self, leaves, employee):
        leave = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 1), leave_type="sabbatical"))
        assert leave.leave_type is LeaveType.CASUAL_LEAVE

    def test_end_before_start(self, leaves, employee):
        with pytest.raises(BadRequestError):
            leaves.submit_leave(employee, request(date(2024, 4, 3), date(2024, 4, 1)))

    def test_overlap_rejected(self, leaves, employee):
        leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 5)))
        with pytest.raises(BadRequestError):
            leaves.submit_leave(employee, request(date(2024, 4, 5), date(2024, 4, 8)))

    def test_cancelled_leave_frees_the_dates(self, leaves, employee):
        first = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 5)))
        leaves.cancel_leave(first.id, employee)
        leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 5)))
        assert len(leaves.list_my_leaves(employee)) == 2


class TestDecisions:
    """Tests for decide_leave() and cancel_leave()."""

    def test_manager_approves_once(self, leaves, manager, employee):
        leave = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 2)))
        approved = leaves.decide_leave(leave.id, True, manager)
        assert approved.status is LeaveStatus.APPROVED
        assert approved.reviewed_by_id == manager.id
        with pytest.raises(BadRequestError):
            leaves.decide_leave(leave.id, False, manager)

    def test_employee_cannot_decide(self, leaves, employee):
        leave = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 2)))
        with pytest.raises(ForbiddenError):
            leaves.decide_leave(leave.id, True, employee)

    def test_unknown_leave(self, leaves, manager):
        with pytest.raises(NotFoundError):
            leaves.decide_leave(999, True, manager)

    def test_only_owner_cancels(self, leaves, employee, other_employee):
        leave = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 2)))
        with pytest.raises(ForbiddenError):
            leaves.cancel_leave(leave.id, other_employee)

    def test_filter_by_status(self, leaves, manager, employee):
        first = leaves.submit_leave(employee, request(date(2024, 4, 1), date(2024, 4, 2)))
        leaves.submit_leave(employee, request(date(2024, 5, 1), date(2024, 5, 2)))
        leaves.decide_leave(first.id, False, manager)
        rejected = leaves.list_leaves(manager, "rejected")
        assert [leave.id for leave in rejected] == [first.id]
        assert len(leaves.list_leaves(manager, "whatever")) == 2


class TestAttendance:
    """Tests for mark_attendance() and list_attendance()."""

    def test_marking_twice_overwrites(self, leaves, employee):
        leaves.mark_attendance(employee, AttendanceMark())
        record = leaves.mark_attendance(employee, AttendanceMark(status="late", work_hours=6.5))
        assert record.work_date == TODAY
        assert record.status is AttendanceStatus.LATE
        records = leaves.list_attendance(employee.id, TODAY, TODAY, employee)
        assert len(records) == 1
        assert records[0].work_hours == 6.5

    def test_other_employee_cannot_read(self, leaves, employee, other_employee):
        with pytest.raises(ForbiddenError):
            leaves.list_attendance(employee.id, TODAY, TODAY, other_employee)

    def test_manager_reads_anyone(self, leaves, manager, employee):
        leaves.mark_attendance(employee, AttendanceMark(work_date=date(2024, 3, 8)))
        records = leaves.list_attendance(employee.id, date(2024, 3, 1), TODAY, manager)
        assert [r.work_date for r in records] == [date(2024, 3, 8)]


class TestLeaveApi:
    """The leave and attendance routes."""

    def test_request_and_approve(self, client, headers_for, manager, employee):
        resp = client.post("/api/v1/leave", headers=headers_for(employee), json={
            "leave_type": "annual_leave", "start_date": "2024-06-03", "end_date": "2024-06-07"})
        assert resp.status_code == 201
        leave = resp.json()
        assert leave["days_count"] == 5

        assert client.get("/api/v1/leave", headers=headers_for(employee)).status_code == 403
        pending = client.get("/api/v1/leave", params={"status": "pending"}, headers=headers_for(manager)).json()
        assert [item["id"] for item in pending] == [leave["id"]]

        approved = client.post(f"/api/v1/leave/{leave['id']}/approve", headers=headers_for(manager)).json()
        assert approved["status"] == "APPROVED"
        mine = client.get("/api/v1/leave/me", headers=headers_for(employee)).json()
        assert [item["status"] for item in mine] == ["APPROVED"]

    def test_attendance(self, client, headers_for, employee, other_employee):
        resp = client.post("/api/v1/attendance", headers=headers_for(employee),
                           json={"work_date": "2024-06-03", "status": "work_from_home", "work_hours": 8})
        assert resp.json()["status"] == "WORK_FROM_HOME"
        params = {"start": "2024-06-01", "end": "2024-06-30"}
        url = f"/api/v1/attendance/user/{employee.id}"
        assert len(client.get(url, params=params, headers=headers_for(employee)).json()) == 1
        assert client.get(url, params=params, headers=headers_for(other_employee)).status_code == 403
